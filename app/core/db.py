from functools import wraps
import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from app.core.config import get_settings
from app.core.errors import StorageUnavailable

log = logging.getLogger("db")

settings = get_settings()

if not settings.database_url:
    # The app can still start, but any DB access will fail until DATABASE_URL is set.
    _engine = None
    SessionLocal = None
else:
    _engine = create_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_engine():
    return _engine


def get_db():
    if SessionLocal is None:
        raise StorageUnavailable("DATABASE_URL is not set")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def guard_storage(fn):
    """Turn connection-level database failures into ``StorageUnavailable``."""

    @wraps(fn)
    def wrapper(db, *args, **kwargs):
        try:
            return fn(db, *args, **kwargs)
        except OperationalError as exc:
            log.error("storage error in %s: %s", fn.__name__, exc)
            db.rollback()
            raise StorageUnavailable() from exc

    return wrapper
