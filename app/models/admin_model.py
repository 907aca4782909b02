from sqlalchemy import Column, Text, TIMESTAMP, Boolean, true
from sqlalchemy.sql import func
from app.models.base import Base, IdType


class Admin(Base):
    __tablename__ = "admin_tbl"

    admin_id = Column(IdType, primary_key=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False)
    password_hash = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
