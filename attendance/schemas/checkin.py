"""Pydantic schemas for attendance check-in."""
import enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RejectionReason(str, enum.Enum):
    event_not_found = "EVENT_NOT_FOUND"
    event_not_accepting_checkins = "EVENT_NOT_ACCEPTING_CHECKINS"
    user_not_found = "USER_NOT_FOUND"
    invalid_keyword = "INVALID_KEYWORD"
    not_enrolled = "NOT_ENROLLED"
    already_checked_in = "ALREADY_CHECKED_IN"
    location_not_captured = "LOCATION_NOT_CAPTURED"
    event_location_undefined = "EVENT_LOCATION_UNDEFINED"
    too_far = "TOO_FAR"


class CheckInRequest(BaseModel):
    """Check-in submitted by a signed-in participant."""
    join_code: str = Field(..., min_length=1, max_length=16)
    keyword: str = Field(..., min_length=1, max_length=16)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    # Set by the client when the device could not provide a position
    location_error: Optional[str] = None


class PublicCheckInRequest(CheckInRequest):
    """Check-in from the public kiosk page: identity comes from the form."""
    registration_number: Optional[str] = None
    email: Optional[str] = None


class AttendanceRecordOut(BaseModel):
    record_id: str
    event_id: str
    user_email: str
    user_name: Optional[str] = None
    enrollment_id: str
    checked_in_at: datetime
    day_index: int
    keyword_used: str
    captured_latitude: Optional[float] = None
    captured_longitude: Optional[float] = None
    distance_validated: bool
    authenticated_submission: bool

    model_config = {"from_attributes": True}


class CheckInOutcome(BaseModel):
    """Result of one check-in attempt: either a record or a typed rejection."""
    accepted: bool
    reason: Optional[RejectionReason] = None
    message: str
    record: Optional[AttendanceRecordOut] = None
    distance_meters: Optional[float] = None
    radius_meters: Optional[int] = None
