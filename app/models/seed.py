from __future__ import annotations

import logging
import os

from sqlalchemy.orm import Session

from app.core.db import SessionLocal, get_engine
from app.core.logging import configure_logging
from app.core.security import hash_password
from app.models.base import Base
from app.models.admin_model import Admin
from app.repositories.admin_repo import create_admin, get_admin_by_email

log = logging.getLogger("seed")

DEFAULT_ADMIN_EMAIL = "admin@dinnerregistration.com"
DEFAULT_ADMIN_NAME = "Admin User"


def seed_admin(db: Session, email: str, name: str, password: str) -> Admin | None:
    if get_admin_by_email(db, email):
        log.info("admin %s already exists", email)
        return None
    admin = create_admin(db, email=email, name=name, password_hash=hash_password(password))
    log.info("admin %s created; change the password after first login", admin.email)
    return admin


def run_seed() -> None:
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("SEED_ADMIN_PASSWORD is not set")

    Base.metadata.create_all(bind=get_engine())
    db = SessionLocal()
    try:
        seed_admin(
            db,
            email=os.getenv("SEED_ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL),
            name=os.getenv("SEED_ADMIN_NAME", DEFAULT_ADMIN_NAME),
            password=password,
        )
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    run_seed()
