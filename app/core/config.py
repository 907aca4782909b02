from pydantic import BaseModel
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 24 * 60
    max_receipt_bytes: int = 5 * 1024 * 1024
    allowed_receipt_types: tuple[str, ...] = ("image/jpeg", "image/jpg", "image/png", "application/pdf")
    registration_fee: int = 12000
    reference_prefix: str = "REF"
    event_name: str = "Annual Dinner"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None
    email_api_url: str = "https://api.resend.com/emails"
    email_api_key: str | None = None
    email_api_from: str | None = None
    notification_timeout_seconds: float = 30.0
    frontend_base_url: str = "http://localhost:8080"
    log_level: str = "INFO"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        database_url = os.getenv("DATABASE_URL", "")
        jwt_secret_key = os.getenv("JWT_SECRET_KEY", "")
        if not jwt_secret_key:
            raise RuntimeError("JWT_SECRET_KEY is not set")
        _settings = Settings(
            database_url=database_url,
            jwt_secret_key=jwt_secret_key,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", str(24 * 60))),
            max_receipt_bytes=int(os.getenv("MAX_RECEIPT_BYTES", str(5 * 1024 * 1024))),
            registration_fee=int(os.getenv("REGISTRATION_FEE", "12000")),
            reference_prefix=os.getenv("REFERENCE_PREFIX", "REF"),
            event_name=os.getenv("EVENT_NAME", "Annual Dinner"),
            smtp_host=os.getenv("SMTP_HOST"),
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            smtp_user=os.getenv("SMTP_USER"),
            smtp_pass=os.getenv("SMTP_PASS"),
            smtp_from=os.getenv("SMTP_FROM"),
            email_api_url=os.getenv("EMAIL_API_URL", "https://api.resend.com/emails"),
            email_api_key=os.getenv("EMAIL_API_KEY"),
            email_api_from=os.getenv("EMAIL_API_FROM"),
            notification_timeout_seconds=float(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "30")),
            frontend_base_url=os.getenv("FRONTEND_BASE_URL", "http://localhost:8080"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
    return _settings
