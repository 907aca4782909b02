from sqlalchemy import Column, BigInteger, Text, TIMESTAMP, Enum as SAEnum, ForeignKey
from sqlalchemy.sql import func
from app.models.base import Base, IdType, enum_values
from app.models.enums import AuditAction


class AuditLog(Base):
    __tablename__ = "audit_log_tbl"

    log_id = Column(IdType, primary_key=True, index=True)
    actor_email = Column(Text, nullable=False)
    action = Column(SAEnum(AuditAction, name="audit_action_enum", values_callable=enum_values), nullable=False)
    submission_id = Column(BigInteger, ForeignKey("submission_tbl.submission_id", ondelete="RESTRICT"), index=True)
    reference_code = Column(Text)
    details = Column(Text)
    ip_address = Column(Text)
    user_agent = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), index=True)
