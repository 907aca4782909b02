"""Review of pending submissions.

A submission leaves ``pending`` at most once. The move to ``approved`` or
``rejected`` is a conditional UPDATE in the store, so two admins acting on the
same record at the same time cannot both win; the loser gets
``AlreadyProcessed``. After the write the audit entry is recorded in the same
request and the applicant email is left to a background task.
"""
import logging
from datetime import datetime, timezone

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.controllers.audit_controller import record_audit
from app.core.errors import AlreadyProcessed, InvalidArgument, NotFound, StorageUnavailable
from app.core.notifications import NotificationDispatcher
from app.models.enums import OUTCOME_AUDIT_ACTION, OUTCOME_STATUS, ReviewOutcome, SubmissionStatus
from app.repositories.submission_repo import get_submission_by_id, transition_submission
from app.schemas.admin_schema import AdminIdentity
from app.schemas.audit_log_schema import AuditOrigin
from app.schemas.review_schema import ReviewResponse
from app.schemas.submission_schema import SubmissionRead

log = logging.getLogger("review")


def _audit_details(outcome: ReviewOutcome, submission, reason: str | None) -> str:
    if outcome == ReviewOutcome.APPROVE:
        return f"Approved submission {submission.reference_code} for {submission.full_name}"
    return f"Rejected submission {submission.reference_code} for {submission.full_name}: {reason}"


def send_outcome_notification(
    dispatcher: NotificationDispatcher,
    submission: SubmissionRead,
    outcome: ReviewOutcome,
    reason: str | None = None,
) -> None:
    """Background task body. Never raises; delivery problems end up in the log."""
    try:
        result = dispatcher.notify_outcome(submission, outcome, reason)
    except Exception:
        log.exception("notification for %s crashed", submission.reference_code)
        return
    if result.success:
        log.info("%s notification for %s sent via %s", outcome.value, submission.reference_code, result.provider)
    else:
        log.error("%s notification for %s not delivered: %s", outcome.value, submission.reference_code, result.error)


def review_submission(
    db: Session,
    submission_id: int,
    outcome: ReviewOutcome,
    actor: AdminIdentity,
    background_tasks: BackgroundTasks,
    dispatcher: NotificationDispatcher,
    reason: str | None = None,
    origin: AuditOrigin | None = None,
) -> ReviewResponse:
    if outcome == ReviewOutcome.REJECT:
        reason = (reason or "").strip()
        if not reason:
            raise InvalidArgument("Rejection reason is required")
    else:
        reason = None

    submission = get_submission_by_id(db, submission_id)
    if not submission:
        raise NotFound("Submission not found")
    if submission.status != SubmissionStatus.PENDING:
        raise AlreadyProcessed(submission.status)

    values = {
        "status": OUTCOME_STATUS[outcome],
        "reviewed_at": datetime.now(timezone.utc),
        "reviewed_by": actor.email,
    }
    if outcome == ReviewOutcome.REJECT:
        values["rejection_reason"] = reason

    if not transition_submission(db, submission_id, SubmissionStatus.PENDING, values):
        db.expire_all()
        current = get_submission_by_id(db, submission_id)
        log.info("review of %s lost the race to another reviewer", submission_id)
        raise AlreadyProcessed(current.status if current else None)

    db.refresh(submission)
    snapshot = SubmissionRead.model_validate(submission)
    log.info("submission %s %s by %s", submission.reference_code, submission.status.value, actor.email)

    try:
        record_audit(
            db,
            actor.email,
            OUTCOME_AUDIT_ACTION[outcome],
            submission=submission,
            details=_audit_details(outcome, submission, reason),
            origin=origin,
        )
    except (SQLAlchemyError, StorageUnavailable):
        # The transition is already committed and stands on its own.
        db.rollback()
        log.exception("audit entry for %s could not be written", snapshot.reference_code)

    background_tasks.add_task(send_outcome_notification, dispatcher, snapshot, outcome, reason)

    verb = "approved" if outcome == ReviewOutcome.APPROVE else "rejected"
    return ReviewResponse(message=f"Submission {verb} successfully", submission=snapshot)
