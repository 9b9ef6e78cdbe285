from sqlalchemy import text
from feedback_app.extensions import db


class NotificationSetting(db.Model):
    __tablename__ = "notification_settings"

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.String(36), db.ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    email = db.Column(db.String(320), nullable=False)
    enabled = db.Column(db.Boolean, nullable=False, default=True, server_default=text("true"))

    __table_args__ = (
        db.Index("ix_notification_settings_form_enabled", "form_id", "enabled"),
    )

    def __repr__(self) -> str:
        return f"<NotificationSetting form={self.form_id} email={self.email} enabled={self.enabled}>"
