from datetime import datetime, timezone
from sqlalchemy import func
from feedback_app.extensions import db

UNKNOWN = "Unknown"


def _utcnow():
    return datetime.now(timezone.utc)


class Feedback(db.Model):
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.String(36), db.ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    message = db.Column(db.Text, nullable=False)

    # Optional screenshot uploaded by the widget
    image_url = db.Column(db.String(2048), nullable=True)
    image_name = db.Column(db.String(255), nullable=True)
    image_size = db.Column(db.Integer, nullable=True)

    # Client environment as reported by the widget
    operating_system = db.Column(db.String(64), nullable=False, default=UNKNOWN, server_default=UNKNOWN)
    screen_category = db.Column(db.String(64), nullable=False, default=UNKNOWN, server_default=UNKNOWN)

    # Identity supplied by the host site, if any
    user_id = db.Column(db.String(255), nullable=True)
    user_email = db.Column(db.String(320), nullable=True)
    user_name = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    __table_args__ = (
        db.Index("ix_feedback_form_created_at", "form_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} form={self.form_id}>"
