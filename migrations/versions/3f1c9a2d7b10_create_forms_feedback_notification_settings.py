"""create forms, feedback and notification_settings

Revision ID: 3f1c9a2d7b10
Revises:
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c9a2d7b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "forms",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("form_id", sa.String(length=36), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=2048), nullable=True),
        sa.Column("image_name", sa.String(length=255), nullable=True),
        sa.Column("image_size", sa.Integer(), nullable=True),
        sa.Column("operating_system", sa.String(length=64), nullable=False, server_default="Unknown"),
        sa.Column("screen_category", sa.String(length=64), nullable=False, server_default="Unknown"),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column("user_email", sa.String(length=320), nullable=True),
        sa.Column("user_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["form_id"], ["forms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feedback_form_created_at", "feedback", ["form_id", "created_at"], unique=False)
    op.create_table(
        "notification_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("form_id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.ForeignKeyConstraint(["form_id"], ["forms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notification_settings_form_enabled", "notification_settings", ["form_id", "enabled"], unique=False
    )


def downgrade():
    op.drop_index("ix_notification_settings_form_enabled", table_name="notification_settings")
    op.drop_table("notification_settings")
    op.drop_index("ix_feedback_form_created_at", table_name="feedback")
    op.drop_table("feedback")
    op.drop_table("forms")
