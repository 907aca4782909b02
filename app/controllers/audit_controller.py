import math

from sqlalchemy.orm import Session
from app.models.audit_log_model import AuditLog
from app.models.enums import AuditAction
from app.repositories.audit_log_repo import create_audit_log, list_audit_logs
from app.schemas.audit_log_schema import AuditLogListResponse, AuditLogRead, AuditOrigin

SYSTEM_ACTOR = "system"


def record_audit(
    db: Session,
    actor_email: str | None,
    action: AuditAction,
    submission=None,
    details: str | None = None,
    origin: AuditOrigin | None = None,
) -> AuditLog:
    """Append one audit entry. Storage errors propagate to the caller."""
    return create_audit_log(
        db,
        actor_email=actor_email or SYSTEM_ACTOR,
        action=action,
        submission_id=submission.submission_id if submission is not None else None,
        reference_code=submission.reference_code if submission is not None else None,
        details=details,
        ip_address=origin.ip_address if origin else None,
        user_agent=origin.user_agent if origin else None,
    )


def list_audit_log_page(db: Session, page: int = 1, limit: int = 20) -> AuditLogListResponse:
    items, total = list_audit_logs(db, skip=(page - 1) * limit, limit=limit)
    return AuditLogListResponse(
        items=[AuditLogRead.model_validate(entry) for entry in items],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if limit else 0,
    )
