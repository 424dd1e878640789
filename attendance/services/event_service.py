"""Event lifecycle service.

Responsibilities:
- Join code generation (6 uppercase alphanumerics, unique per event)
- Status transitions: pending -> approved | rejected, pending/approved -> cancelled,
  approved -> finished
- Authorization hook: only the organizer may cancel or finish an event
- Approval invariant: an approved event either skips location validation
  (waived or remote) or has a complete geofence
"""
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from attendance.config import settings
from attendance.models.coordinator import Coordinator
from attendance.models.event import Event, EventStatus

logger = logging.getLogger(__name__)

JOIN_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
JOIN_CODE_LENGTH = 6
_JOIN_CODE_ATTEMPTS = 10


def _new_join_code(db: Session) -> str:
    # Unlike day keywords, join codes identify the event globally, so they must not repeat
    for _ in range(_JOIN_CODE_ATTEMPTS):
        code = "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))
        if not db.query(Event.event_id).filter(Event.join_code == code).first():
            return code
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Could not allocate a join code")


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def get_event_by_code(db: Session, join_code: str) -> Optional[Event]:
    return db.query(Event).filter(Event.join_code == join_code.strip().upper()).first()


def _check_authorization(event: Event, actor_email: Optional[str]) -> None:
    """Only the organizer may cancel or finish their event."""
    if not actor_email or actor_email.strip().lower() != event.organizer_email:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the organizer may change this event",
        )


def _check_transition(event: Event, allowed_from: tuple[EventStatus, ...], action: str) -> None:
    if event.status not in allowed_from:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action} an event that is {event.status.value}",
        )


def _check_geofence_invariant(event: Event) -> None:
    if event.location_validation_waived or event.remote_attendance_allowed:
        return
    if not event.geofence_defined:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Approved events need latitude, longitude and radius unless location validation "
                   "is waived or remote attendance is allowed",
        )


ENROLLABLE_STATUSES = (EventStatus.pending, EventStatus.approved)


def check_enrollment_open(event: Event, now: Optional[datetime] = None) -> None:
    """Raise unless new enrollments are still accepted for the event."""
    if event.status not in ENROLLABLE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot enroll in an event that is {event.status.value}",
        )
    closes_at = event.enrollment_closes_at
    if closes_at is None:
        return
    if closes_at.tzinfo is None:
        # SQLite hands back naive values; they were stored as UTC
        closes_at = closes_at.replace(tzinfo=timezone.utc)
    if (now or datetime.now(timezone.utc)) > closes_at:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Enrollment for this event has closed")


def create_event(db: Session, data: dict[str, Any]) -> Event:
    """Create an event request in the pending state."""
    data = dict(data)
    data["organizer_email"] = data["organizer_email"].strip().lower()
    if data.get("validation_radius_meters") is None:
        data["validation_radius_meters"] = settings.DEFAULT_VALIDATION_RADIUS_METERS

    # The unique join_code column is the final authority when two creates draw the same code
    for attempt in range(1, _JOIN_CODE_ATTEMPTS + 1):
        event = Event(**data, join_code=_new_join_code(db), status=EventStatus.pending)
        db.add(event)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == _JOIN_CODE_ATTEMPTS:
                raise
            logger.warning("Join code %s was taken concurrently; drawing another", event.join_code)
            continue
        break
    db.refresh(event)
    logger.info("Created event '%s' (%s) with join code %s", event.title, event.event_id, event.join_code)
    return event


def approve_event(db: Session, event_id: str, approver_email: str, updates: dict[str, Any]) -> Event:
    """Approve a pending event, filling in the data the campus administrator completes."""
    event = get_event_or_404(db, event_id)
    _check_transition(event, (EventStatus.pending,), "approve")

    coordinator_id = updates.get("coordinator_id")
    if coordinator_id and not db.query(Coordinator).filter(Coordinator.coordinator_id == coordinator_id).first():
        raise HTTPException(status_code=404, detail="Coordinator not found")

    for field, value in updates.items():
        if value is not None:
            setattr(event, field, value)

    _check_geofence_invariant(event)

    event.status = EventStatus.approved
    event.approver_email = approver_email.strip().lower()
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Event %s approved by %s", event_id, event.approver_email)
    return event


def reject_event(db: Session, event_id: str, approver_email: str) -> Event:
    event = get_event_or_404(db, event_id)
    _check_transition(event, (EventStatus.pending,), "reject")
    event.status = EventStatus.rejected
    event.approver_email = approver_email.strip().lower()
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Event %s rejected by %s", event_id, event.approver_email)
    return event


def cancel_event(db: Session, event_id: str, actor_email: Optional[str]) -> Event:
    event = get_event_or_404(db, event_id)
    _check_authorization(event, actor_email)
    if event.status == EventStatus.cancelled:
        raise HTTPException(status_code=400, detail="Event is already cancelled")
    _check_transition(event, (EventStatus.pending, EventStatus.approved), "cancel")
    event.status = EventStatus.cancelled
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Cancelled event %s", event_id)
    return event


def finish_event(db: Session, event_id: str, actor_email: Optional[str]) -> Event:
    """Close an approved event; check-ins stop and certificates can be issued."""
    event = get_event_or_404(db, event_id)
    _check_authorization(event, actor_email)
    _check_transition(event, (EventStatus.approved,), "finish")
    event.status = EventStatus.finished
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Finished event %s", event_id)
    return event
