import uuid
from sqlalchemy import func
from feedback_app.extensions import db


class Form(db.Model):
    """A registered widget installation. Owned by the dashboard; read-only here."""
    __tablename__ = "forms"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    url = db.Column(db.String(2048), nullable=False)  # the single origin allowed to submit
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<Form id={self.id} url={self.url!r}>"
