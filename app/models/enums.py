import enum


class SubmissionStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewOutcome(enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


class AuditAction(enum.Enum):
    LOGIN = "login"
    APPROVE_SUBMISSION = "approve_submission"
    REJECT_SUBMISSION = "reject_submission"


OUTCOME_STATUS = {
    ReviewOutcome.APPROVE: SubmissionStatus.APPROVED,
    ReviewOutcome.REJECT: SubmissionStatus.REJECTED,
}

OUTCOME_AUDIT_ACTION = {
    ReviewOutcome.APPROVE: AuditAction.APPROVE_SUBMISSION,
    ReviewOutcome.REJECT: AuditAction.REJECT_SUBMISSION,
}
