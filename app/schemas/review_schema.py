from pydantic import BaseModel
from typing import Optional
from app.schemas.submission_schema import SubmissionRead


class RejectRequest(BaseModel):
    reason: Optional[str] = None


class ReviewResponse(BaseModel):
    message: str
    submission: SubmissionRead
