import logging
import math

from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.core.errors import InvalidArgument, NotFound
from app.models.enums import SubmissionStatus
from app.repositories.submission_repo import (
    create_submission,
    get_submission_by_id,
    get_submission_by_reference_code,
    list_submissions,
)
from app.schemas.submission_schema import (
    ReceiptRead,
    ReceiptUpload,
    SubmissionCreate,
    SubmissionCreated,
    SubmissionListResponse,
    SubmissionRead,
    SubmissionStatusRead,
)

log = logging.getLogger("submissions")

REQUIRED_FIELDS = ("first_name", "last_name", "phone_number", "email")


def _missing_fields(fields: dict) -> list[str]:
    return [name for name in REQUIRED_FIELDS if not (fields.get(name) or "").strip()]


def submit_registration(db: Session, fields: dict, receipt: ReceiptUpload | None) -> SubmissionCreated:
    missing = _missing_fields(fields)
    if missing:
        raise InvalidArgument(
            {
                "error": "Missing required fields",
                "message": f"The following fields are required: {', '.join(missing)}",
                "missing_fields": missing,
            }
        )
    if receipt is None or not (receipt.payload or receipt.url):
        raise InvalidArgument({"error": "Receipt file is required"})

    try:
        data = SubmissionCreate.model_validate(fields)
    except ValidationError as exc:
        raise InvalidArgument(
            {
                "error": "Validation failed",
                "validation_errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in exc.errors()
                ],
            }
        )

    settings = get_settings()
    submission = create_submission(
        db,
        data,
        receipt,
        amount=settings.registration_fee,
        reference_prefix=settings.reference_prefix,
    )
    log.info("submission %s created for %s", submission.reference_code, submission.email)
    return SubmissionCreated(reference_code=submission.reference_code, submission_id=submission.submission_id)


def get_submission(db: Session, submission_id: int) -> SubmissionRead:
    submission = get_submission_by_id(db, submission_id)
    if not submission:
        raise NotFound("Submission not found")
    return SubmissionRead.model_validate(submission)


def get_submission_status(db: Session, reference_code: str) -> SubmissionStatusRead:
    submission = get_submission_by_reference_code(db, reference_code.strip())
    if not submission:
        raise NotFound("Submission not found")
    return SubmissionStatusRead.model_validate(submission)


def list_submission_page(
    db: Session,
    status: SubmissionStatus | None = None,
    page: int = 1,
    limit: int = 10,
) -> SubmissionListResponse:
    items, total = list_submissions(db, status=status, skip=(page - 1) * limit, limit=limit)
    total_pages = math.ceil(total / limit) if limit else 0
    return SubmissionListResponse(
        items=[SubmissionRead.model_validate(s) for s in items],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def get_receipt(db: Session, submission_id: int) -> ReceiptRead:
    submission = get_submission_by_id(db, submission_id)
    if not submission:
        raise NotFound("Submission not found")
    if not submission.receipt_data and not submission.receipt_url:
        raise NotFound("Receipt not found")

    data_url = None
    if submission.receipt_data:
        data_url = f"data:{submission.receipt_mime_type};base64,{submission.receipt_data}"
    return ReceiptRead(
        mime_type=submission.receipt_mime_type,
        original_name=submission.receipt_original_name,
        size_bytes=submission.receipt_size_bytes,
        data_url=data_url,
        receipt_url=submission.receipt_url,
    )
