import logging

from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.controllers.audit_controller import record_audit
from app.models.enums import AuditAction
from app.schemas.admin_schema import AdminIdentity, AdminLogin, TokenResponse
from app.schemas.audit_log_schema import AuditOrigin
from app.repositories.admin_repo import get_admin_by_email
from app.core.security import verify_password, create_access_token

log = logging.getLogger("auth")


def login(db: Session, data: AdminLogin, origin: AuditOrigin | None = None) -> TokenResponse:
    admin = get_admin_by_email(db, data.email)
    if not admin or not admin.is_active or not verify_password(data.password, admin.password_hash):
        log.info("failed login for %s", data.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(subject=str(admin.admin_id), email=admin.email)
    record_audit(db, admin.email, AuditAction.LOGIN, origin=origin)
    return TokenResponse(access_token=token, admin=AdminIdentity.model_validate(admin))
