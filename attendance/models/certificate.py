"""Certificate ORM model."""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from attendance.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    certificate_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_name = Column(String(200), nullable=False)
    validation_code = Column(String(64), nullable=False, unique=True)
    content_hash = Column(String(64), nullable=False, unique=True)  # SHA-256 hex
    issued_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "user_email", name="uq_certificate_event_user"),
    )
