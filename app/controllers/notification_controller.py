"""Operator check that the configured email providers can deliver."""
import logging
from datetime import datetime, timezone

from app.core.config import get_settings
from app.core.errors import InvalidArgument
from app.core.notifications import NotificationDispatcher
from app.models.enums import OUTCOME_STATUS, ReviewOutcome
from app.schemas.notification_schema import TestEmailRequest, TestEmailResponse
from app.schemas.submission_schema import SubmissionRead

log = logging.getLogger("notifications")

TEST_EMAIL_TYPES = {
    "approval": ReviewOutcome.APPROVE,
    "rejection": ReviewOutcome.REJECT,
}
TEST_REJECTION_REASON = "Test rejection reason"


def _stand_in_submission(data: TestEmailRequest, outcome: ReviewOutcome) -> SubmissionRead:
    return SubmissionRead(
        submission_id=0,
        reference_code=data.reference_code or "TEST123",
        first_name="Test",
        last_name="User",
        full_name="Test User",
        phone_number="+10000000000",
        email=data.email or "test@example.com",
        receipt_original_name="receipt.png",
        receipt_mime_type="image/png",
        receipt_size_bytes=0,
        amount=get_settings().registration_fee,
        status=OUTCOME_STATUS[outcome],
        submitted_at=datetime.now(timezone.utc),
    )


def send_test_email(dispatcher: NotificationDispatcher, data: TestEmailRequest, actor_email: str) -> TestEmailResponse:
    outcome = TEST_EMAIL_TYPES.get(data.type)
    if outcome is None:
        raise InvalidArgument({"error": 'Invalid email type. Use "approval" or "rejection"'})

    submission = _stand_in_submission(data, outcome)
    reason = TEST_REJECTION_REASON if outcome == ReviewOutcome.REJECT else None
    result = dispatcher.notify_outcome(submission, outcome, reason)
    log.info("test %s email to %s requested by %s: success=%s", data.type, submission.email, actor_email, result.success)
    return TestEmailResponse(message=f"{data.type.capitalize()} email test completed", result=result)
