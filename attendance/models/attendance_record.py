"""AttendanceRecord ORM model — written only by the check-in protocol."""
import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, UniqueConstraint
from attendance.database import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    record_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_name = Column(String(200), nullable=True)
    enrollment_id = Column(String(36), ForeignKey("enrollments.enrollment_id"), nullable=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=False)
    day_index = Column(Integer, nullable=False)  # 1-based
    keyword_used = Column(String(6), nullable=False)
    captured_latitude = Column(Float, nullable=True)
    captured_longitude = Column(Float, nullable=True)
    distance_validated = Column(Boolean, nullable=False, default=False)
    authenticated_submission = Column(Boolean, nullable=False, default=True)

    # Final authority against concurrent duplicate check-ins
    __table_args__ = (
        UniqueConstraint("event_id", "user_email", "day_index", name="uq_attendance_event_user_day"),
    )
