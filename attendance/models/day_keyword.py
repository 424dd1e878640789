"""DayKeyword ORM model — one secret check-in word per event day."""
import uuid
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from attendance.database import Base


class DayKeyword(Base):
    __tablename__ = "event_day_keywords"

    keyword_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False)
    keyword_date = Column(Date, nullable=False)
    keyword = Column(String(6), nullable=False)  # always stored upper-case
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="keywords")

    __table_args__ = (
        UniqueConstraint("event_id", "keyword_date", name="uq_day_keyword_event_date"),
    )
