"""Pydantic schemas for Enrollments."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from attendance.models.enrollment import EnrollmentStatus


class EnrollmentCreate(BaseModel):
    user_email: str
    status: EnrollmentStatus = EnrollmentStatus.pending


class EnrollmentUpdate(BaseModel):
    status: EnrollmentStatus


class EnrollmentOut(BaseModel):
    enrollment_id: str
    event_id: str
    user_email: str
    status: EnrollmentStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
