import pytest

from feedback_app.services import email as email_service
from feedback_app.services import store

AUTH = {"Authorization": "Bearer test-notify-secret"}


def _payload(**kw):
    body = {
        "formId": "f1",
        "message": "Broken button",
        "userName": "Ann",
        "userEmail": "ann@example.com",
        "operating_system": "Windows",
        "screen_category": "Desktop",
        "image_url": None,
        "created_at": "2026-10-19T10:00:00+00:00",
    }
    body.update(kw)
    return body


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer wrong"},
    {"Authorization": "test-notify-secret"},
])
def test_requires_shared_bearer(client, make_form, sent_emails, headers):
    make_form("f1", "https://example.com", recipients=["a@example.com"])
    resp = client.post("/api/notify", json=_payload(), headers=headers)
    assert resp.status_code == 401
    assert sent_emails == []


def test_unknown_form_is_404(client, sent_emails):
    resp = client.post("/api/notify", json=_payload(formId="missing"), headers=AUTH)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Form not found"}


def test_missing_form_id_is_400(client):
    resp = client.post("/api/notify", json={"message": "x"}, headers=AUTH)
    assert resp.status_code == 400


def test_no_settings_is_a_normal_200(client, make_form, sent_emails):
    make_form("f1", "https://example.com", disabled=["off@example.com"])
    resp = client.post("/api/notify", json=_payload(), headers=AUTH)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "No notification settings found"}
    assert sent_emails == []


def test_sends_to_each_recipient(client, make_form, sent_emails):
    make_form("f1", "https://example.com", recipients=["a@example.com", "b@example.com"])
    resp = client.post("/api/notify", json=_payload(), headers=AUTH)
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "sent": 2, "failed": 0}
    assert sorted(c[0] for c in sent_emails) == ["a@example.com", "b@example.com"]
    assert all(c[2]["hasUserInfo"] for c in sent_emails)


def test_partial_failure_still_succeeds(client, make_form, monkeypatch):
    make_form("f1", "https://example.com", recipients=["a@example.com", "bad@example.com"])

    def _send(to_email, form_url, parameters):
        if to_email == "bad@example.com":
            raise ConnectionError("smtp refused")

    monkeypatch.setattr(email_service, "send_feedback_notification", _send)
    resp = client.post("/api/notify", json=_payload(), headers=AUTH)
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "sent": 1, "failed": 1}


def test_every_send_failing_is_500(client, make_form, monkeypatch):
    make_form("f1", "https://example.com", recipients=["a@example.com", "b@example.com"])

    def _send(to_email, form_url, parameters):
        raise ConnectionError("smtp refused")

    monkeypatch.setattr(email_service, "send_feedback_notification", _send)
    resp = client.post("/api/notify", json=_payload(), headers=AUTH)
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to send notification"}


def test_store_failure_is_500(client, monkeypatch):
    def _boom(form_id):
        raise RuntimeError("db down")

    monkeypatch.setattr(store, "get_form_by_id", _boom)
    resp = client.post("/api/notify", json=_payload(), headers=AUTH)
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to send notification"}


def test_get_not_allowed(client):
    resp = client.get("/api/notify", headers=AUTH)
    assert resp.status_code == 405
