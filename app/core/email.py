import logging
import smtplib
from email.message import EmailMessage

import httpx

from app.core.config import Settings
from app.schemas.notification_schema import OutgoingEmail

log = logging.getLogger("email")


class EmailNotifier:
    """A single email delivery provider. ``send`` raises on any failure."""

    name = "base"

    def is_configured(self) -> bool:
        raise NotImplementedError

    def send(self, message: OutgoingEmail) -> None:
        raise NotImplementedError


class SmtpNotifier(EmailNotifier):
    name = "smtp"

    def __init__(
        self,
        host: str | None,
        port: int,
        user: str | None,
        password: str | None,
        sender: str | None,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpNotifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_pass,
            sender=settings.smtp_from,
            timeout=settings.notification_timeout_seconds,
        )

    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password and self.sender)

    def send(self, message: OutgoingEmail) -> None:
        if not self.is_configured():
            raise RuntimeError("SMTP settings are not configured")

        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = message.to_email
        msg["Subject"] = message.subject
        msg.set_content(message.text_body)
        msg.add_alternative(message.html_body, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.send_message(msg)


class HttpApiNotifier(EmailNotifier):
    """Transactional email over a Resend-style JSON API."""

    name = "email_api"

    def __init__(self, url: str, api_key: str | None, sender: str | None, timeout: float = 30.0, transport=None):
        self.url = url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpApiNotifier":
        return cls(
            url=settings.email_api_url,
            api_key=settings.email_api_key,
            sender=settings.email_api_from or settings.smtp_from,
            timeout=settings.notification_timeout_seconds,
        )

    def is_configured(self) -> bool:
        return bool(self.url and self.api_key and self.sender)

    def send(self, message: OutgoingEmail) -> None:
        if not self.is_configured():
            raise RuntimeError("Email API settings are not configured")

        payload = {
            "from": self.sender,
            "to": [message.to_email],
            "subject": message.subject,
            "html": message.html_body,
            "text": message.text_body,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(self.url, json=payload, headers=headers)
        response.raise_for_status()
        log.debug("email api accepted message for %s: %s", message.to_email, response.text[:200])
