"""Persistence boundary for the pipeline: form lookups, feedback inserts, recipients."""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from feedback_app.errors import PersistenceError
from feedback_app.extensions import db
from feedback_app.models import Feedback, Form, NotificationSetting


def get_form_by_id(form_id: str) -> Optional[Form]:
    return db.session.get(Form, str(form_id))


def insert_feedback(**fields) -> Feedback:
    """
    Insert one immutable feedback row and return it with created_at assigned.
    Any store failure rolls the session back and surfaces as PersistenceError.
    """
    record = Feedback(**fields)
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceError(f"feedback insert failed: {type(exc).__name__}") from exc
    return record


def get_enabled_recipients(form_id: str) -> List[str]:
    rows = (
        db.session.query(NotificationSetting.email)
        .filter(NotificationSetting.form_id == str(form_id), NotificationSetting.enabled.is_(True))
        .order_by(NotificationSetting.id)
        .all()
    )
    seen = set()
    recipients = []
    for (email,) in rows:
        key = (email or "").strip().lower()
        if key and key not in seen:
            seen.add(key)
            recipients.append(email.strip())
    return recipients
