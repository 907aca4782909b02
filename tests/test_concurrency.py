import threading

import pytest
from fastapi import BackgroundTasks
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.controllers.review_controller import review_submission
from app.core.errors import AlreadyProcessed
from app.core.notifications import NotificationDispatcher
from app.models.audit_log_model import AuditLog
from app.models.base import Base
from app.models.enums import ReviewOutcome, SubmissionStatus
from app.models.submission_model import Submission
from app.repositories.submission_repo import create_submission
from app.schemas.admin_schema import AdminIdentity
from app.schemas.submission_schema import SubmissionCreate
from helpers import RecordingNotifier, registration_fields, sample_receipt


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.mark.parametrize("outcomes", [
    (ReviewOutcome.APPROVE, ReviewOutcome.REJECT),
    (ReviewOutcome.APPROVE, ReviewOutcome.APPROVE),
])
def test_concurrent_reviews_have_exactly_one_winner(session_factory, outcomes):
    with session_factory() as db:
        data = SubmissionCreate.model_validate(registration_fields())
        submission_id = create_submission(db, data, sample_receipt(), amount=12000).submission_id

    notifier = RecordingNotifier("primary")
    dispatcher = NotificationDispatcher([notifier])
    barrier = threading.Barrier(len(outcomes))
    results = [None] * len(outcomes)
    tasks = [BackgroundTasks() for _ in outcomes]

    def reviewer(index, outcome):
        actor = AdminIdentity(admin_id=index + 1, email=f"admin{index}@example.com", name=f"Admin {index}")
        with session_factory() as db:
            barrier.wait()
            try:
                resp = review_submission(
                    db, submission_id, outcome, actor, tasks[index], dispatcher, reason="Receipt is unreadable"
                )
                results[index] = resp.submission.status
            except AlreadyProcessed:
                results[index] = "already_processed"
            except Exception as exc:
                results[index] = exc

    threads = [threading.Thread(target=reviewer, args=(i, o)) for i, o in enumerate(outcomes)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    winners = [r for r in results if isinstance(r, SubmissionStatus)]
    assert len(winners) == 1, results
    assert results.count("already_processed") == 1, results
    assert sum(len(t.tasks) for t in tasks) == 1

    with session_factory() as db:
        stored = db.get(Submission, submission_id)
        assert stored.status == winners[0]
        winner_index = results.index(winners[0])
        assert stored.reviewed_by == f"admin{winner_index}@example.com"
        if stored.status == SubmissionStatus.APPROVED:
            assert stored.rejection_reason is None
        assert db.query(AuditLog).count() == 1
