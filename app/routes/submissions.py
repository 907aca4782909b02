from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.controllers.file_controller import read_receipt
from app.controllers.submission_controller import get_submission_status, submit_registration
from app.schemas.submission_schema import SubmissionCreated, SubmissionStatusRead

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.post("", response_model=SubmissionCreated, status_code=status.HTTP_201_CREATED)
def submit_registration_route(
    first_name: str = Form(""),
    last_name: str = Form(""),
    phone_number: str = Form(""),
    email: str = Form(""),
    referred_by: str | None = Form(None),
    receipt: UploadFile | None = File(None),
    db: Session = Depends(get_db),
):
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "phone_number": phone_number,
        "email": email,
        "referred_by": referred_by,
    }
    uploaded = read_receipt(receipt) if receipt is not None and receipt.filename else None
    return submit_registration(db, fields, uploaded)


@router.get("/status/{reference_code}", response_model=SubmissionStatusRead)
def get_submission_status_route(reference_code: str, db: Session = Depends(get_db)):
    return get_submission_status(db, reference_code)
