"""Coordinator ORM model — academic coordinator signing an event's certificates."""
import uuid
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from attendance.database import Base


class Coordinator(Base):
    __tablename__ = "coordinators"

    coordinator_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
