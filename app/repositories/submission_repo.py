import logging
import secrets
import string
import time

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.db import guard_storage
from app.core.errors import DuplicateEmail, ReferenceCodeConflict
from app.models.enums import SubmissionStatus
from app.models.submission_model import Submission
from app.schemas.submission_schema import ReceiptUpload, SubmissionCreate

log = logging.getLogger("submission_repo")

REFERENCE_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
REFERENCE_SUFFIX_LENGTH = 5
MAX_REFERENCE_ATTEMPTS = 3


def generate_reference_code(prefix: str = "REF") -> str:
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(REFERENCE_SUFFIX_ALPHABET) for _ in range(REFERENCE_SUFFIX_LENGTH))
    return f"{prefix}{millis}{suffix}"


@guard_storage
def get_submission_by_id(db: Session, submission_id: int) -> Submission | None:
    stmt = select(Submission).where(Submission.submission_id == submission_id)
    return db.execute(stmt).scalars().first()


@guard_storage
def get_submission_by_reference_code(db: Session, reference_code: str) -> Submission | None:
    stmt = select(Submission).where(Submission.reference_code == reference_code)
    return db.execute(stmt).scalars().first()


@guard_storage
def get_submission_by_email(db: Session, email: str) -> Submission | None:
    stmt = select(Submission).where(Submission.email == email.strip().lower())
    return db.execute(stmt).scalars().first()


@guard_storage
def create_submission(
    db: Session,
    data: SubmissionCreate,
    receipt: ReceiptUpload,
    amount: int,
    reference_prefix: str = "REF",
) -> Submission:
    existing = get_submission_by_email(db, data.email)
    if existing:
        raise DuplicateEmail(existing.reference_code)

    for attempt in range(1, MAX_REFERENCE_ATTEMPTS + 1):
        reference_code = generate_reference_code(reference_prefix)
        submission = Submission(
            **data.model_dump(),
            reference_code=reference_code,
            receipt_data=receipt.payload,
            receipt_url=receipt.url,
            receipt_original_name=receipt.original_name,
            receipt_mime_type=receipt.mime_type,
            receipt_size_bytes=receipt.size_bytes,
            amount=amount,
            status=SubmissionStatus.PENDING,
        )
        db.add(submission)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            # Another request may have registered the same email in between.
            existing = get_submission_by_email(db, data.email)
            if existing:
                raise DuplicateEmail(existing.reference_code)
            if get_submission_by_reference_code(db, reference_code) is None:
                raise
            log.warning(
                "reference code collision on %s (attempt %d/%d)",
                reference_code,
                attempt,
                MAX_REFERENCE_ATTEMPTS,
            )
            continue
        db.refresh(submission)
        return submission

    raise ReferenceCodeConflict("Could not allocate a unique reference code, please retry")


@guard_storage
def list_submissions(
    db: Session,
    status: SubmissionStatus | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Submission], int]:
    stmt = select(Submission)
    count_stmt = select(func.count()).select_from(Submission)
    if status:
        stmt = stmt.where(Submission.status == status)
        count_stmt = count_stmt.where(Submission.status == status)
    stmt = stmt.order_by(Submission.submitted_at.desc(), Submission.submission_id.desc()).offset(skip).limit(limit)
    items = list(db.execute(stmt).scalars().all())
    total = db.execute(count_stmt).scalar_one()
    return items, total


@guard_storage
def transition_submission(
    db: Session,
    submission_id: int,
    expected_status: SubmissionStatus,
    values: dict,
) -> bool:
    """Apply ``values`` only if the stored status still equals ``expected_status``.

    This is a single conditional UPDATE, so concurrent callers racing on the same
    row cannot both succeed. Returns True when the row was changed.
    """
    stmt = (
        update(Submission)
        .where(Submission.submission_id == submission_id)
        .where(Submission.status == expected_status)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    db.commit()
    return result.rowcount == 1
