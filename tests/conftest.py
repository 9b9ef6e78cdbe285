import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

import pytest
from feedback_app import create_app
from feedback_app.extensions import db
from feedback_app.models import Form, NotificationSetting
from feedback_app.services import email as email_service


@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        MAIL_SUPPRESS_SEND=True,
        NOTIFY_SECRET="test-notify-secret",
        NOTIFICATION_URL=None,
        REQUIRE_ORIGIN=False,
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()


@pytest.fixture()
def make_form(app):
    """Create a form (and optionally its notification settings); returns the form id."""
    def _make(form_id="f1", url="https://example.com", recipients=(), disabled=()):
        with app.app_context():
            db.session.add(Form(id=form_id, url=url))
            for email in recipients:
                db.session.add(NotificationSetting(form_id=form_id, email=email, enabled=True))
            for email in disabled:
                db.session.add(NotificationSetting(form_id=form_id, email=email, enabled=False))
            db.session.commit()
        return form_id
    return _make


@pytest.fixture()
def sent_emails(monkeypatch):
    """Replace the provider call; records (to, form_url, parameters) per send."""
    calls = []

    def _fake_send(to_email, form_url, parameters):
        calls.append((to_email, form_url, dict(parameters)))

    monkeypatch.setattr(email_service, "send_feedback_notification", _fake_send)
    return calls
