from app.core.email import EmailNotifier
from app.schemas.submission_schema import ReceiptUpload

ADMIN_PASSWORD = "correct-password"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class RecordingNotifier(EmailNotifier):
    def __init__(self, name: str, configured: bool = True, fail: bool = False):
        self.name = name
        self.configured = configured
        self.fail = fail
        self.sent = []
        self.attempts = 0

    def is_configured(self) -> bool:
        return self.configured

    def send(self, message) -> None:
        self.attempts += 1
        if self.fail:
            raise RuntimeError(f"{self.name} is down")
        self.sent.append(message)


def registration_fields(**overrides):
    fields = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone_number": "+2348012345678",
        "email": "ada@example.com",
        "referred_by": "Charles Babbage",
    }
    fields.update(overrides)
    return fields


def sample_receipt(**overrides):
    receipt = {
        "payload": "iVBORw0KGgo=",
        "mime_type": "image/png",
        "original_name": "receipt.png",
        "size_bytes": 8,
    }
    receipt.update(overrides)
    return ReceiptUpload(**receipt)
