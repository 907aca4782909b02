from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from app.models.enums import AuditAction


class AuditOrigin(BaseModel):
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class AuditLogRead(BaseModel):
    log_id: int
    actor_email: str
    action: AuditAction
    submission_id: Optional[int] = None
    reference_code: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuditLogListResponse(BaseModel):
    items: list[AuditLogRead]
    total: int
    page: int
    limit: int
    total_pages: int
