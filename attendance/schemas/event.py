"""Pydantic schemas for Events and their lifecycle transitions."""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from attendance.models.event import EventStatus


class EventCreate(BaseModel):
    title: str
    description: Optional[str] = None
    campus: Optional[str] = None
    start_date: date
    end_date: date
    enrollment_closes_at: Optional[datetime] = None
    organizer_email: str
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    validation_radius_meters: Optional[int] = Field(None, gt=0)
    remote_attendance_allowed: bool = False
    location_validation_waived: bool = False

    @model_validator(mode="after")
    def _dates_in_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventApprove(BaseModel):
    """Data a campus administrator completes when approving an event request."""
    approver_email: str
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    validation_radius_meters: Optional[int] = Field(None, gt=0)
    remote_attendance_allowed: Optional[bool] = None
    location_validation_waived: Optional[bool] = None
    workload_hours: Optional[int] = Field(None, ge=0)
    coordinator_id: Optional[str] = None


class EventReject(BaseModel):
    approver_email: str


class EventOut(BaseModel):
    event_id: str
    join_code: str
    title: str
    description: Optional[str] = None
    campus: Optional[str] = None
    workload_hours: Optional[int] = None
    start_date: date
    end_date: date
    enrollment_closes_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    validation_radius_meters: Optional[int] = None
    remote_attendance_allowed: bool
    location_validation_waived: bool
    status: EventStatus
    organizer_email: str
    approver_email: Optional[str] = None
    coordinator_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CoordinatorCreate(BaseModel):
    name: str
    description: Optional[str] = None


class CoordinatorOut(BaseModel):
    coordinator_id: str
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
