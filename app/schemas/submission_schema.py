from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.models.enums import SubmissionStatus

PHONE_PATTERN = r"^\+?[0-9]{10,15}$"


class SubmissionBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., pattern=PHONE_PATTERN)
    email: EmailStr
    referred_by: Optional[str] = Field(None, max_length=100)


class SubmissionCreate(SubmissionBase):
    @field_validator("first_name", "last_name", "phone_number", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("referred_by", mode="before")
    @classmethod
    def _blank_referrer(cls, value):
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ReceiptUpload(BaseModel):
    """Receipt handed over by the upload collaborator; stored, never interpreted."""

    payload: Optional[str] = None
    url: Optional[str] = None
    mime_type: str
    original_name: str
    size_bytes: int = Field(..., ge=0)


class SubmissionRead(SubmissionBase):
    submission_id: int
    reference_code: str
    full_name: str
    receipt_original_name: str
    receipt_mime_type: str
    receipt_size_bytes: int
    receipt_url: Optional[str] = None
    amount: int
    status: SubmissionStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    submitted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubmissionCreated(BaseModel):
    message: str = "Registration submitted successfully"
    reference_code: str
    submission_id: int


class SubmissionStatusRead(BaseModel):
    reference_code: str
    status: SubmissionStatus
    submitted_at: datetime
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class SubmissionListResponse(BaseModel):
    items: list[SubmissionRead]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ReceiptRead(BaseModel):
    mime_type: str
    original_name: str
    size_bytes: int
    data_url: Optional[str] = None
    receipt_url: Optional[str] = None
