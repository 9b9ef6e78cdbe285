from types import SimpleNamespace
from datetime import datetime, timezone

import pytest

from feedback_app.errors import ValidationError
from feedback_app.services.submissions import NotificationEvent, parse_submission


def test_defaults_for_missing_optionals():
    fields = parse_submission({"formId": " f1 ", "message": "  keep my spacing  "})
    assert fields["form_id"] == "f1"
    assert fields["message"] == "  keep my spacing  "
    assert fields["operating_system"] == "Unknown"
    assert fields["screen_category"] == "Unknown"
    for name in ("image_url", "image_name", "image_size", "user_id", "user_email", "user_name"):
        assert fields[name] is None


def test_image_size_accepts_numeric_strings_and_drops_garbage():
    assert parse_submission({"formId": "f1", "message": "m", "image_size": "1024"})["image_size"] == 1024
    assert parse_submission({"formId": "f1", "message": "m", "image_size": "big"})["image_size"] is None
    assert parse_submission({"formId": "f1", "message": "m", "image_size": -5})["image_size"] is None


def test_blank_optional_strings_become_defaults():
    fields = parse_submission({"formId": "f1", "message": "m", "operating_system": "  ", "user_email": ""})
    assert fields["operating_system"] == "Unknown"
    assert fields["user_email"] is None


@pytest.mark.parametrize("body", [None, {}, {"formId": None, "message": "m"}, {"formId": "f1", "message": None}])
def test_required_fields(body):
    with pytest.raises(ValidationError):
        parse_submission(body)


def test_event_from_record_and_wire_form():
    record = SimpleNamespace(
        form_id="f1", message="Broken button", operating_system="Unknown", screen_category="Mobile",
        image_url=None, created_at=datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc),
    )
    event = NotificationEvent.from_record(record, {"user_email": "ann@example.com"})
    assert event.has_user_info is True

    payload = event.to_payload()
    assert payload == {
        "formId": "f1",
        "message": "Broken button",
        "userName": None,
        "userEmail": "ann@example.com",
        "operating_system": "Unknown",
        "screen_category": "Mobile",
        "image_url": None,
        "created_at": "2026-10-19T12:00:00+00:00",
    }
    assert NotificationEvent.from_payload(payload) == event


def test_event_without_identity():
    event = NotificationEvent.from_payload({"formId": "f1", "message": "hi"})
    assert event.has_user_info is False
