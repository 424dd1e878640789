"""Attendance check-in API routes.

Rejections come back from checkin_service as typed outcomes; this layer only
maps each reason to an HTTP status. Clients branch on detail.reason.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.dependencies import current_user_email
from attendance.schemas.checkin import (
    AttendanceRecordOut,
    CheckInOutcome,
    CheckInRequest,
    PublicCheckInRequest,
    RejectionReason,
)
from attendance.services import checkin_service, event_service

logger = logging.getLogger(__name__)
router = APIRouter()
records_router = APIRouter()

REJECTION_STATUS = {
    RejectionReason.event_not_found: status.HTTP_404_NOT_FOUND,
    RejectionReason.event_not_accepting_checkins: status.HTTP_403_FORBIDDEN,
    RejectionReason.user_not_found: status.HTTP_404_NOT_FOUND,
    RejectionReason.invalid_keyword: status.HTTP_400_BAD_REQUEST,
    RejectionReason.not_enrolled: status.HTTP_403_FORBIDDEN,
    RejectionReason.already_checked_in: status.HTTP_409_CONFLICT,
    RejectionReason.location_not_captured: status.HTTP_422_UNPROCESSABLE_ENTITY,
    RejectionReason.event_location_undefined: status.HTTP_422_UNPROCESSABLE_ENTITY,
    RejectionReason.too_far: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _respond(outcome: CheckInOutcome) -> CheckInOutcome:
    if outcome.accepted:
        return outcome
    raise HTTPException(
        status_code=REJECTION_STATUS[outcome.reason],
        detail=outcome.model_dump(mode="json", exclude={"accepted", "record"}, exclude_none=True),
    )


@router.post("/", response_model=CheckInOutcome, status_code=status.HTTP_201_CREATED)
def check_in(
    payload: CheckInRequest,
    db: Session = Depends(get_db),
    email: Optional[str] = Depends(current_user_email),
):
    """Check in the signed-in participant."""
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sign in to check in")
    return _respond(checkin_service.check_in(db, payload, authenticated_email=email))


@router.post("/public", response_model=CheckInOutcome, status_code=status.HTTP_201_CREATED)
def public_check_in(payload: PublicCheckInRequest, db: Session = Depends(get_db)):
    """Check in from the public page, identifying the participant by registration number or email."""
    return _respond(checkin_service.check_in(db, payload))


@records_router.get("/{event_id}/attendance", response_model=list[AttendanceRecordOut])
def list_attendance(event_id: str, db: Session = Depends(get_db)):
    event_service.get_event_or_404(db, event_id)
    return checkin_service.list_records(db, event_id)
