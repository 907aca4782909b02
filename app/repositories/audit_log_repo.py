from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.core.db import guard_storage
from app.models.audit_log_model import AuditLog


@guard_storage
def create_audit_log(db: Session, **fields) -> AuditLog:
    entry = AuditLog(**fields)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@guard_storage
def list_audit_logs(db: Session, skip: int = 0, limit: int = 20) -> tuple[list[AuditLog], int]:
    stmt = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.log_id.desc()).offset(skip).limit(limit)
    items = list(db.execute(stmt).scalars().all())
    total = db.execute(select(func.count()).select_from(AuditLog)).scalar_one()
    return items, total


@guard_storage
def list_audit_logs_for_submission(db: Session, submission_id: int) -> list[AuditLog]:
    stmt = select(AuditLog).where(AuditLog.submission_id == submission_id).order_by(AuditLog.log_id)
    return list(db.execute(stmt).scalars().all())
