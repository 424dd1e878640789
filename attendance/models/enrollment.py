"""Enrollment ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from attendance.database import Base


class EnrollmentStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class Enrollment(Base):
    __tablename__ = "enrollments"

    enrollment_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False)
    user_email = Column(String(255), ForeignKey("users.email"), nullable=False)
    status = Column(SAEnum(EnrollmentStatus), nullable=False, default=EnrollmentStatus.pending)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("event_id", "user_email", name="uq_enrollment_event_user"),
    )
