"""Event ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, Date, DateTime, Float, Integer, Boolean, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from attendance.database import Base


class EventStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"
    finished = "finished"


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    join_code = Column(String(6), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    campus = Column(String(150), nullable=True)
    workload_hours = Column(Integer, nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    enrollment_closes_at = Column(DateTime(timezone=True), nullable=True)

    # Geofence
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    validation_radius_meters = Column(Integer, nullable=True, default=100)
    remote_attendance_allowed = Column(Boolean, nullable=False, default=False)
    location_validation_waived = Column(Boolean, nullable=False, default=False)

    status = Column(SAEnum(EventStatus), nullable=False, default=EventStatus.pending)
    organizer_email = Column(String(255), nullable=False)
    approver_email = Column(String(255), nullable=True)
    coordinator_id = Column(String(36), ForeignKey("coordinators.coordinator_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    coordinator = relationship("Coordinator")
    keywords = relationship("DayKeyword", back_populates="event", cascade="all, delete-orphan")

    @property
    def total_calendar_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    @property
    def geofence_defined(self) -> bool:
        return (
            self.latitude is not None
            and self.longitude is not None
            and self.validation_radius_meters is not None
        )
