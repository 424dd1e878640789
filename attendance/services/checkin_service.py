"""Attendance check-in protocol.

A check-in attempt passes through a fixed sequence of gates:

1. resolve the event by its join code (it must be approved)
2. resolve the participant (signed-in email, or registration number / email
   typed on the public page)
3. validate the day keyword, which yields the calendar date being attended
4. require a confirmed enrollment
5. derive the 1-based day index from the keyword date
6. refuse a second record for the same day
7. check the captured position against the event geofence, unless the event
   waives location validation or allows remote attendance
8. write the attendance record

Gates 1-7 only read. A failed gate returns a CheckInOutcome carrying a
RejectionReason; rejections are ordinary results, not exceptions. Database
errors propagate unchanged.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from attendance.models.attendance_record import AttendanceRecord
from attendance.models.enrollment import Enrollment, EnrollmentStatus
from attendance.models.event import Event, EventStatus
from attendance.models.user import User
from attendance.schemas.checkin import (
    AttendanceRecordOut,
    CheckInOutcome,
    CheckInRequest,
    PublicCheckInRequest,
    RejectionReason,
)
from attendance.services import geo, keyword_service

logger = logging.getLogger(__name__)


def _reject(reason: RejectionReason, message: str, **extra) -> CheckInOutcome:
    logger.info("Check-in rejected (%s): %s", reason.value, message)
    return CheckInOutcome(accepted=False, reason=reason, message=message, **extra)


def _find_event(db: Session, join_code: str) -> Optional[Event]:
    code = (join_code or "").strip().upper()
    if not code:
        return None
    return db.query(Event).filter(Event.join_code == code).first()


def _resolve_public_identity(db: Session, payload: PublicCheckInRequest) -> Optional[User]:
    """Registration number takes precedence over email when both are given."""
    if payload.registration_number and payload.registration_number.strip():
        return (
            db.query(User)
            .filter(User.registration_number == payload.registration_number.strip())
            .first()
        )
    if payload.email and payload.email.strip():
        return db.query(User).filter(func.lower(User.email) == payload.email.strip().lower()).first()
    return None


def _confirmed_enrollment(db: Session, event_id: str, email: str) -> Optional[Enrollment]:
    return (
        db.query(Enrollment)
        .filter(
            Enrollment.event_id == event_id,
            Enrollment.user_email == email,
            Enrollment.status == EnrollmentStatus.confirmed,
        )
        .first()
    )


def _existing_record(db: Session, event_id: str, email: str, day_index: int) -> Optional[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.event_id == event_id,
            AttendanceRecord.user_email == email,
            AttendanceRecord.day_index == day_index,
        )
        .first()
    )


def _check_geofence(event: Event, payload: CheckInRequest) -> Optional[CheckInOutcome]:
    """Return a rejection, or None when the position is acceptable."""
    if payload.location_error:
        return _reject(
            RejectionReason.location_not_captured,
            f"Could not capture your location: {payload.location_error}",
        )
    if payload.latitude is None or payload.longitude is None:
        return _reject(RejectionReason.location_not_captured, "Location was not captured")
    if not geo.valid_coordinates(payload.latitude, payload.longitude):
        return _reject(RejectionReason.location_not_captured, "Captured location is not a valid coordinate")

    if not event.geofence_defined:
        return _reject(RejectionReason.event_location_undefined, "Event has no location defined")

    distance = geo.distance_meters(payload.latitude, payload.longitude, event.latitude, event.longitude)
    radius = event.validation_radius_meters
    if not geo.is_within_radius(distance, radius):
        return _reject(
            RejectionReason.too_far,
            f"You are {geo.format_distance(distance)} from the event "
            f"(maximum allowed: {geo.format_distance(radius)})",
            distance_meters=round(distance, 1),
            radius_meters=radius,
        )
    return None


def check_in(
    db: Session,
    payload: CheckInRequest,
    authenticated_email: Optional[str] = None,
) -> CheckInOutcome:
    """Run one check-in attempt.

    With authenticated_email the participant is the signed-in user; otherwise
    payload must be a PublicCheckInRequest naming the participant.
    """
    # 1. Event
    event = _find_event(db, payload.join_code)
    if event is None:
        return _reject(RejectionReason.event_not_found, "No event found for this code")
    if event.status != EventStatus.approved:
        return _reject(
            RejectionReason.event_not_accepting_checkins,
            f"Event is {event.status.value} and does not accept check-ins",
        )

    # 2. Identity
    if authenticated_email:
        email = authenticated_email.strip().lower()
        user = db.query(User).filter(func.lower(User.email) == email).first()
        user_name = user.full_name if user else email
    else:
        if not isinstance(payload, PublicCheckInRequest):
            return _reject(RejectionReason.user_not_found, "No participant identified")
        user = _resolve_public_identity(db, payload)
        if user is None:
            return _reject(
                RejectionReason.user_not_found,
                "User not found. Check the registration number or email provided",
            )
        email = user.email
        user_name = user.full_name

    # 3. Keyword
    keyword_date = keyword_service.lookup(db, event.event_id, payload.keyword)
    if keyword_date is None:
        return _reject(RejectionReason.invalid_keyword, "Invalid keyword for this event")

    # 4. Enrollment
    enrollment = _confirmed_enrollment(db, event.event_id, email)
    if enrollment is None:
        return _reject(RejectionReason.not_enrolled, "User is not enrolled in this event")

    # 5. Day index
    day_index = keyword_service.day_index_for_date(event, keyword_date)

    # 6. Duplicate
    if _existing_record(db, event.event_id, email, day_index) is not None:
        return _reject(RejectionReason.already_checked_in, f"Attendance already recorded for day {day_index}")

    # 7. Geofence
    if event.location_validation_waived or event.remote_attendance_allowed:
        distance_validated = False
    else:
        rejection = _check_geofence(event, payload)
        if rejection is not None:
            return rejection
        distance_validated = True

    captured = geo.valid_coordinates(payload.latitude, payload.longitude)

    # 8. Commit
    record = AttendanceRecord(
        event_id=event.event_id,
        user_email=email,
        user_name=user_name,
        enrollment_id=enrollment.enrollment_id,
        checked_in_at=datetime.now(timezone.utc),
        day_index=day_index,
        keyword_used=keyword_service.normalize_keyword(payload.keyword),
        captured_latitude=payload.latitude if captured else None,
        captured_longitude=payload.longitude if captured else None,
        distance_validated=distance_validated,
        authenticated_submission=authenticated_email is not None,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request for the same day won the unique constraint
        db.rollback()
        if _existing_record(db, event.event_id, email, day_index) is not None:
            return _reject(
                RejectionReason.already_checked_in,
                f"Attendance already recorded for day {day_index}",
            )
        raise
    db.refresh(record)

    logger.info("Recorded attendance for %s at event %s day %d", email, event.event_id, day_index)
    return CheckInOutcome(
        accepted=True,
        message=f"Attendance recorded for day {day_index}",
        record=AttendanceRecordOut.model_validate(record),
    )


def list_records(db: Session, event_id: str) -> list[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.event_id == event_id)
        .order_by(AttendanceRecord.day_index, AttendanceRecord.checked_in_at)
        .all()
    )
