import json

import httpx
import pytest

from app.core.email import HttpApiNotifier, SmtpNotifier
from app.core.notifications import NotificationDispatcher, build_notification_dispatcher, render_outcome_email
from app.core import notifications
from app.core.config import Settings
from app.models.enums import ReviewOutcome
from app.schemas.submission_schema import SubmissionRead
from helpers import RecordingNotifier


@pytest.fixture()
def snapshot(make_submission):
    return SubmissionRead.model_validate(make_submission())


def test_primary_provider_is_used_first(snapshot, dispatcher, primary_notifier, secondary_notifier):
    result = dispatcher.notify_outcome(snapshot, ReviewOutcome.APPROVE)

    assert result.success is True
    assert result.provider == "primary"
    assert len(primary_notifier.sent) == 1
    assert secondary_notifier.attempts == 0


def test_falls_back_when_primary_fails(snapshot, dispatcher, primary_notifier, secondary_notifier):
    primary_notifier.fail = True

    result = dispatcher.notify_outcome(snapshot, ReviewOutcome.REJECT, "Wrong amount")

    assert result.success is True
    assert result.provider == "secondary"
    assert primary_notifier.attempts == 1
    assert len(secondary_notifier.sent) == 1


def test_skips_unconfigured_primary(snapshot, dispatcher, primary_notifier, secondary_notifier):
    primary_notifier.configured = False

    result = dispatcher.notify_outcome(snapshot, ReviewOutcome.APPROVE)

    assert result.provider == "secondary"
    assert primary_notifier.attempts == 0


def test_reports_failure_without_raising(snapshot):
    primary = RecordingNotifier("primary", fail=True)
    secondary = RecordingNotifier("secondary", configured=False)
    dispatcher = NotificationDispatcher([primary, secondary])

    result = dispatcher.notify_outcome(snapshot, ReviewOutcome.APPROVE)

    assert result.success is False
    assert result.provider is None
    assert "primary is down" in result.error
    assert "secondary: not configured" in result.error


def test_no_providers(snapshot):
    result = NotificationDispatcher([]).notify_outcome(snapshot, ReviewOutcome.APPROVE)
    assert result.success is False
    assert result.error == "no notification providers registered"


def test_render_failure_is_reported(snapshot, monkeypatch):
    def broken_render(*args, **kwargs):
        raise KeyError("template")

    monkeypatch.setattr(notifications, "render_outcome_email", broken_render)
    result = NotificationDispatcher([RecordingNotifier("primary")]).notify_outcome(snapshot, ReviewOutcome.APPROVE)
    assert result.success is False
    assert result.error.startswith("render failed")


def test_approval_email_content(snapshot):
    message = render_outcome_email(snapshot, ReviewOutcome.APPROVE, event_name="Gala")
    assert message.to_email == snapshot.email
    assert "Approved" in message.subject
    assert snapshot.reference_code in message.html_body
    assert snapshot.reference_code in message.text_body
    assert "Congratulations" in message.html_body


def test_rejection_email_escapes_reason(snapshot):
    message = render_outcome_email(snapshot, ReviewOutcome.REJECT, "<b>fake</b> receipt", event_name="Gala")
    assert snapshot.reference_code in message.html_body
    assert "&lt;b&gt;fake&lt;/b&gt; receipt" in message.html_body
    assert "<b>fake</b>" not in message.html_body
    assert "<b>fake</b> receipt" in message.text_body


def test_http_api_notifier_posts_message(snapshot):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_1"})

    notifier = HttpApiNotifier(
        url="https://mail.example.com/emails",
        api_key="key-123",
        sender="events@example.com",
        transport=httpx.MockTransport(handler),
    )
    notifier.send(render_outcome_email(snapshot, ReviewOutcome.APPROVE))

    assert captured["auth"] == "Bearer key-123"
    assert captured["body"]["to"] == [snapshot.email]
    assert captured["body"]["from"] == "events@example.com"


def test_http_api_error_triggers_fallback_failure(snapshot):
    notifier = HttpApiNotifier(
        url="https://mail.example.com/emails",
        api_key="key-123",
        sender="events@example.com",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "down"})),
    )
    result = NotificationDispatcher([notifier]).notify_outcome(snapshot, ReviewOutcome.APPROVE)
    assert result.success is False
    assert "email_api" in result.error


def test_smtp_notifier_configuration():
    assert SmtpNotifier(None, 587, None, None, None).is_configured() is False
    with pytest.raises(RuntimeError):
        SmtpNotifier(None, 587, None, None, None).send(None)
    assert SmtpNotifier("smtp.example.com", 587, "user", "pass", "events@example.com").is_configured() is True


def test_build_dispatcher_orders_smtp_before_api():
    settings = Settings(
        database_url="",
        jwt_secret_key="x",
        smtp_host="smtp.example.com",
        smtp_user="user",
        smtp_pass="pass",
        smtp_from="events@example.com",
        email_api_key="key",
        notification_timeout_seconds=5,
    )
    dispatcher = build_notification_dispatcher(settings)
    assert [n.name for n in dispatcher.notifiers] == ["smtp", "email_api"]
    assert all(n.is_configured() for n in dispatcher.notifiers)
    assert dispatcher.notifiers[0].timeout == 5


def test_test_email_approval(client, auth_headers, primary_notifier):
    resp = client.post(
        "/admin/test-email",
        json={"type": "approval", "email": "ops@example.com", "reference_code": "REFCHECK1"},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Approval email test completed"
    assert body["result"] == {"success": True, "provider": "primary", "error": None}
    sent = primary_notifier.sent[0]
    assert sent.to_email == "ops@example.com"
    assert "Approved" in sent.subject
    assert "REFCHECK1" in sent.html_body


def test_test_email_rejection_uses_defaults(client, auth_headers, primary_notifier):
    resp = client.post("/admin/test-email", json={"type": "rejection"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["message"] == "Rejection email test completed"
    sent = primary_notifier.sent[0]
    assert sent.to_email == "test@example.com"
    assert "TEST123" in sent.html_body
    assert "Test rejection reason" in sent.html_body


def test_test_email_reports_delivery_failure(client, auth_headers, primary_notifier, secondary_notifier):
    primary_notifier.fail = True
    secondary_notifier.fail = True

    resp = client.post("/admin/test-email", json={"type": "approval"}, headers=auth_headers)

    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["success"] is False
    assert "primary is down" in result["error"]


def test_test_email_rejects_unknown_type(client, auth_headers, primary_notifier):
    resp = client.post("/admin/test-email", json={"type": "reminder"}, headers=auth_headers)

    assert resp.status_code == 400
    assert "approval" in resp.json()["detail"]["error"]
    assert primary_notifier.attempts == 0


def test_test_email_requires_admin(client, primary_notifier):
    resp = client.post("/admin/test-email", json={"type": "approval"})
    assert resp.status_code in (401, 403)
    assert primary_notifier.attempts == 0
