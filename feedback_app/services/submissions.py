"""Widget submission parsing and the event handed to notification dispatch."""
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Optional

from feedback_app.errors import ValidationError
from feedback_app.models import UNKNOWN

_OPTIONAL_TEXT = (
    ("image_url", 2048),
    ("image_name", 255),
    ("user_id", 255),
    ("user_email", 320),
    ("user_name", 255),
)


def clean_str(val, max_len: int = 255) -> Optional[str]:
    """
    Trim and enforce max length. Numbers are accepted and stringified.
    Returns None if empty after cleaning.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        val = str(val)
    if not isinstance(val, str):
        return None
    s = val.strip()
    if not s:
        return None
    return s[:max_len]


def clean_int(val) -> Optional[int]:
    if val is None or isinstance(val, bool):
        return None
    try:
        n = int(float(val))
    except (TypeError, ValueError, OverflowError):
        return None
    return n if n >= 0 else None


def parse_submission(data: Any) -> Dict[str, Any]:
    """
    Validate a widget body and return the column values for a feedback row.
    Raises ValidationError when formId is absent or message is blank.
    """
    if not isinstance(data, dict):
        raise ValidationError("body is not a JSON object")

    form_id = clean_str(data.get("formId"))
    message = data.get("message")
    if not form_id or not isinstance(message, str) or not message.strip():
        raise ValidationError("formId and message are required")

    fields = {
        "form_id": form_id,
        "message": message,
        "image_size": clean_int(data.get("image_size")),
        "operating_system": clean_str(data.get("operating_system"), max_len=64) or UNKNOWN,
        "screen_category": clean_str(data.get("screen_category"), max_len=64) or UNKNOWN,
    }
    for name, max_len in _OPTIONAL_TEXT:
        fields[name] = clean_str(data.get(name), max_len=max_len)
    return fields


@dataclass(frozen=True)
class NotificationEvent:
    form_id: str
    message: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    operating_system: Optional[str] = None
    screen_category: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def has_user_info(self) -> bool:
        return bool(self.user_name or self.user_email)

    @classmethod
    def from_record(cls, record, body: Dict[str, Any]) -> "NotificationEvent":
        created = record.created_at
        return cls(
            form_id=record.form_id,
            message=record.message,
            user_name=clean_str(body.get("user_name")),
            user_email=clean_str(body.get("user_email"), max_len=320),
            operating_system=record.operating_system,
            screen_category=record.screen_category,
            image_url=record.image_url,
            created_at=created.isoformat() if isinstance(created, datetime) else created,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Wire form posted to the notification endpoint."""
        d = asdict(self)
        return {
            "formId": d.pop("form_id"),
            "message": d.pop("message"),
            "userName": d.pop("user_name"),
            "userEmail": d.pop("user_email"),
            **d,
        }

    @classmethod
    def from_payload(cls, data: Any) -> "NotificationEvent":
        if not isinstance(data, dict):
            raise ValidationError("body is not a JSON object")
        form_id = clean_str(data.get("formId"))
        if not form_id:
            raise ValidationError("formId is required")
        message = data.get("message")
        return cls(
            form_id=form_id,
            message=message if isinstance(message, str) else "",
            user_name=clean_str(data.get("userName")),
            user_email=clean_str(data.get("userEmail"), max_len=320),
            operating_system=clean_str(data.get("operating_system"), max_len=64),
            screen_category=clean_str(data.get("screen_category"), max_len=64),
            image_url=clean_str(data.get("image_url"), max_len=2048),
            created_at=clean_str(data.get("created_at"), max_len=64),
        )
