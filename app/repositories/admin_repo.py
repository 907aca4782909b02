from sqlalchemy.orm import Session
from sqlalchemy import select
from app.core.db import guard_storage
from app.models.admin_model import Admin


@guard_storage
def get_admin_by_email(db: Session, email: str) -> Admin | None:
    stmt = select(Admin).where(Admin.email == email.strip().lower())
    return db.execute(stmt).scalars().first()


@guard_storage
def get_admin_by_id(db: Session, admin_id: int) -> Admin | None:
    stmt = select(Admin).where(Admin.admin_id == admin_id)
    return db.execute(stmt).scalars().first()


@guard_storage
def create_admin(db: Session, email: str, name: str, password_hash: str) -> Admin:
    admin = Admin(email=email.strip().lower(), name=name, password_hash=password_hash, is_active=True)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin
