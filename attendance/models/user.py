"""User ORM model — people who enroll in events and receive certificates."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from attendance.database import Base


class User(Base):
    __tablename__ = "users"

    email = Column(String(255), primary_key=True)
    full_name = Column(String(200), nullable=False)
    registration_number = Column(String(50), nullable=True, unique=True)  # matrícula
    campus = Column(String(150), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
