"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates all tables for the attendance and certificate service:
users, coordinators, events, event_day_keywords, enrollments,
attendance_records, certificates.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("email", sa.String(255), primary_key=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("registration_number", sa.String(50), nullable=True, unique=True),
        sa.Column("campus", sa.String(150), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- coordinators ---
    op.create_table(
        "coordinators",
        sa.Column("coordinator_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("join_code", sa.String(6), nullable=False, unique=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("campus", sa.String(150), nullable=True),
        sa.Column("workload_hours", sa.Integer, nullable=True),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("enrollment_closes_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("validation_radius_meters", sa.Integer, nullable=True, server_default="100"),
        sa.Column("remote_attendance_allowed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("location_validation_waived", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("organizer_email", sa.String(255), nullable=False),
        sa.Column("approver_email", sa.String(255), nullable=True),
        sa.Column("coordinator_id", sa.String(36), sa.ForeignKey("coordinators.coordinator_id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_join_code", "events", ["join_code"])

    # --- event_day_keywords ---
    op.create_table(
        "event_day_keywords",
        sa.Column("keyword_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("keyword_date", sa.Date, nullable=False),
        sa.Column("keyword", sa.String(6), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "keyword_date", name="uq_day_keyword_event_date"),
    )

    # --- enrollments ---
    op.create_table(
        "enrollments",
        sa.Column("enrollment_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_email", sa.String(255), sa.ForeignKey("users.email"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "user_email", name="uq_enrollment_event_user"),
    )

    # --- attendance_records ---
    op.create_table(
        "attendance_records",
        sa.Column("record_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(200), nullable=True),
        sa.Column("enrollment_id", sa.String(36), sa.ForeignKey("enrollments.enrollment_id"), nullable=False),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("day_index", sa.Integer, nullable=False),
        sa.Column("keyword_used", sa.String(6), nullable=False),
        sa.Column("captured_latitude", sa.Float, nullable=True),
        sa.Column("captured_longitude", sa.Float, nullable=True),
        sa.Column("distance_validated", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("authenticated_submission", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("event_id", "user_email", "day_index", name="uq_attendance_event_user_day"),
    )

    # --- certificates ---
    op.create_table(
        "certificates",
        sa.Column("certificate_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(200), nullable=False),
        sa.Column("validation_code", sa.String(64), nullable=False, unique=True),
        sa.Column("content_hash", sa.String(64), nullable=False, unique=True),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "user_email", name="uq_certificate_event_user"),
    )


def downgrade() -> None:
    op.drop_table("certificates")
    op.drop_table("attendance_records")
    op.drop_table("enrollments")
    op.drop_table("event_day_keywords")
    op.drop_index("ix_events_join_code", table_name="events")
    op.drop_table("events")
    op.drop_table("coordinators")
    op.drop_table("users")
