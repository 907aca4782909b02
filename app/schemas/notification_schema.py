from pydantic import BaseModel, EmailStr
from typing import Optional


class OutgoingEmail(BaseModel):
    to_email: str
    subject: str
    html_body: str
    text_body: str = "This email requires an HTML-capable client."


class NotificationResult(BaseModel):
    success: bool
    provider: Optional[str] = None
    error: Optional[str] = None


class TestEmailRequest(BaseModel):
    type: str
    email: Optional[EmailStr] = None
    reference_code: Optional[str] = None


class TestEmailResponse(BaseModel):
    message: str
    result: NotificationResult
