from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_request_origin, require_admin
from app.core.notifications import NotificationDispatcher, get_notification_dispatcher
from app.models.enums import ReviewOutcome, SubmissionStatus
from app.controllers.auth_controller import login
from app.controllers.audit_controller import list_audit_log_page
from app.controllers.notification_controller import send_test_email
from app.controllers.review_controller import review_submission
from app.controllers.submission_controller import get_receipt, get_submission, list_submission_page
from app.schemas.admin_schema import AdminIdentity, AdminLogin, TokenResponse
from app.schemas.audit_log_schema import AuditLogListResponse, AuditOrigin
from app.schemas.notification_schema import TestEmailRequest, TestEmailResponse
from app.schemas.review_schema import RejectRequest, ReviewResponse
from app.schemas.submission_schema import ReceiptRead, SubmissionListResponse, SubmissionRead

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=TokenResponse)
def login_route(
    payload: AdminLogin,
    db: Session = Depends(get_db),
    origin: AuditOrigin = Depends(get_request_origin),
):
    return login(db, payload, origin)


@router.get("/verify", response_model=AdminIdentity)
def verify_route(admin: AdminIdentity = Depends(require_admin)):
    return admin


@router.get("/submissions", response_model=SubmissionListResponse)
def list_submissions_route(
    status: SubmissionStatus | None = Query(default=None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _admin: AdminIdentity = Depends(require_admin),
):
    return list_submission_page(db, status=status, page=page, limit=limit)


@router.get("/submissions/{submission_id}", response_model=SubmissionRead)
def get_submission_route(
    submission_id: int,
    db: Session = Depends(get_db),
    _admin: AdminIdentity = Depends(require_admin),
):
    return get_submission(db, submission_id)


@router.get("/submissions/{submission_id}/receipt", response_model=ReceiptRead)
def get_receipt_route(
    submission_id: int,
    db: Session = Depends(get_db),
    _admin: AdminIdentity = Depends(require_admin),
):
    return get_receipt(db, submission_id)


@router.post("/submissions/{submission_id}/approve", response_model=ReviewResponse)
def approve_submission_route(
    submission_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(require_admin),
    origin: AuditOrigin = Depends(get_request_origin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    return review_submission(
        db,
        submission_id,
        ReviewOutcome.APPROVE,
        admin,
        background_tasks,
        dispatcher,
        origin=origin,
    )


@router.post("/submissions/{submission_id}/reject", response_model=ReviewResponse)
def reject_submission_route(
    submission_id: int,
    payload: RejectRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(require_admin),
    origin: AuditOrigin = Depends(get_request_origin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    return review_submission(
        db,
        submission_id,
        ReviewOutcome.REJECT,
        admin,
        background_tasks,
        dispatcher,
        reason=payload.reason,
        origin=origin,
    )


@router.get("/audit-logs", response_model=AuditLogListResponse)
def list_audit_logs_route(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _admin: AdminIdentity = Depends(require_admin),
):
    return list_audit_log_page(db, page=page, limit=limit)


@router.post("/test-email", response_model=TestEmailResponse)
def send_test_email_route(
    payload: TestEmailRequest,
    admin: AdminIdentity = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    return send_test_email(dispatcher, payload, admin.email)
