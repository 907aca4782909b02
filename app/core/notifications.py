"""Outcome notifications for reviewed submissions.

The dispatcher walks an ordered list of providers and stops at the first one
that delivers. It never raises: callers always get a ``NotificationResult``.
"""
import html
import logging

from fastapi import Request

from app.core.config import Settings, get_settings
from app.core.email import EmailNotifier, HttpApiNotifier, SmtpNotifier
from app.models.enums import ReviewOutcome
from app.schemas.notification_schema import NotificationResult, OutgoingEmail
from app.schemas.submission_schema import SubmissionRead

log = logging.getLogger("notifications")


def _render_approval_email(submission: SubmissionRead, event_name: str) -> OutgoingEmail:
    subject = f"{event_name}: Your Registration Has Been Approved"
    body = f"""
    <div style="font-family: Arial, sans-serif; line-height: 1.6;">
      <h2>Registration approved</h2>
      <p>Hello {html.escape(submission.full_name)},</p>
      <p>Congratulations! Your payment has been verified and your registration for {html.escape(event_name)} is confirmed.</p>
      <p><strong>Reference code:</strong> {submission.reference_code}<br/>
         <strong>Amount paid:</strong> {submission.amount:,}</p>
      <p>Please keep this reference code and present it at the event.</p>
      <p>We look forward to seeing you!<br/>{html.escape(event_name)} Team</p>
    </div>
    """
    text = (
        f"Hello {submission.full_name},\n\n"
        f"Your registration for {event_name} has been approved.\n"
        f"Reference code: {submission.reference_code}\n"
    )
    return OutgoingEmail(to_email=submission.email, subject=subject, html_body=body, text_body=text)


def _render_rejection_email(submission: SubmissionRead, reason: str, event_name: str) -> OutgoingEmail:
    subject = f"{event_name}: Registration Update"
    body = f"""
    <div style="font-family: Arial, sans-serif; line-height: 1.6;">
      <h2>Registration update</h2>
      <p>Hello {html.escape(submission.full_name)},</p>
      <p>We reviewed your registration and unfortunately could not approve it.</p>
      <p><strong>Reference code:</strong> {submission.reference_code}<br/>
         <strong>Reason:</strong> {html.escape(reason)}</p>
      <p>If you believe this is a mistake, please contact the organizers and quote your reference code.</p>
      <p>Thank you,<br/>{html.escape(event_name)} Team</p>
    </div>
    """
    text = (
        f"Hello {submission.full_name},\n\n"
        f"Your registration for {event_name} could not be approved.\n"
        f"Reference code: {submission.reference_code}\n"
        f"Reason: {reason}\n"
    )
    return OutgoingEmail(to_email=submission.email, subject=subject, html_body=body, text_body=text)


def render_outcome_email(
    submission: SubmissionRead,
    outcome: ReviewOutcome,
    reason: str | None = None,
    event_name: str = "Annual Dinner",
) -> OutgoingEmail:
    if outcome == ReviewOutcome.APPROVE:
        return _render_approval_email(submission, event_name)
    return _render_rejection_email(submission, reason or "", event_name)


class NotificationDispatcher:
    def __init__(self, notifiers: list[EmailNotifier], event_name: str = "Annual Dinner"):
        self.notifiers = list(notifiers)
        self.event_name = event_name

    def send(self, message: OutgoingEmail) -> NotificationResult:
        errors = []
        for notifier in self.notifiers:
            if not notifier.is_configured():
                errors.append(f"{notifier.name}: not configured")
                continue
            try:
                notifier.send(message)
            except Exception as exc:
                log.warning("provider %s failed for %s: %s", notifier.name, message.to_email, exc)
                errors.append(f"{notifier.name}: {exc}")
                continue
            log.info("email '%s' sent to %s via %s", message.subject, message.to_email, notifier.name)
            return NotificationResult(success=True, provider=notifier.name)

        error = "; ".join(errors) if errors else "no notification providers registered"
        return NotificationResult(success=False, error=error)

    def notify_outcome(
        self,
        submission: SubmissionRead,
        outcome: ReviewOutcome,
        reason: str | None = None,
    ) -> NotificationResult:
        try:
            message = render_outcome_email(submission, outcome, reason, self.event_name)
        except Exception as exc:
            log.exception("could not render %s email for %s", outcome.value, submission.reference_code)
            return NotificationResult(success=False, error=f"render failed: {exc}")
        return self.send(message)


def build_notification_dispatcher(settings: Settings) -> NotificationDispatcher:
    notifiers = [
        SmtpNotifier.from_settings(settings),
        HttpApiNotifier.from_settings(settings),
    ]
    configured = [n.name for n in notifiers if n.is_configured()]
    if not configured:
        log.warning("no email provider configured; outcome notifications will not be delivered")
    else:
        log.info("email providers in order: %s", ", ".join(configured))
    return NotificationDispatcher(notifiers, event_name=settings.event_name)


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    dispatcher = getattr(request.app.state, "notification_dispatcher", None)
    if dispatcher is None:
        dispatcher = build_notification_dispatcher(get_settings())
        request.app.state.notification_dispatcher = dispatcher
    return dispatcher
