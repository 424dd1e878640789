"""Event API routes — delegates to event_service for lifecycle rules."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.dependencies import current_user_email
from attendance.models.event import Event, EventStatus
from attendance.schemas.event import (
    EventApprove,
    EventCreate,
    EventOut,
    EventReject,
)
from attendance.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Submit an event request; it starts pending approval."""
    return event_service.create_event(db, payload.model_dump())


@router.get("/", response_model=list[EventOut])
def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    organizer_email: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List events with optional filters."""
    query = db.query(Event)
    if status_filter:
        query = query.filter(Event.status == status_filter)
    if organizer_email:
        query = query.filter(Event.organizer_email == organizer_email.strip().lower())
    return query.order_by(Event.start_date.desc()).all()


@router.get("/by-code/{join_code}", response_model=EventOut)
def get_event_by_code(join_code: str, db: Session = Depends(get_db)):
    """Resolve the code printed on an event's QR poster."""
    event = event_service.get_event_by_code(db, join_code)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event_or_404(db, event_id)


@router.post("/{event_id}/approve", response_model=EventOut)
def approve_event(event_id: str, payload: EventApprove, db: Session = Depends(get_db)):
    """Campus administrator approves a pending event, completing geofence and certificate data."""
    updates = payload.model_dump(exclude={"approver_email"}, exclude_unset=True)
    return event_service.approve_event(db, event_id, payload.approver_email, updates)


@router.post("/{event_id}/reject", response_model=EventOut)
def reject_event(event_id: str, payload: EventReject, db: Session = Depends(get_db)):
    return event_service.reject_event(db, event_id, payload.approver_email)


@router.post("/{event_id}/cancel", response_model=EventOut)
def cancel_event(
    event_id: str,
    db: Session = Depends(get_db),
    actor_email: Optional[str] = Depends(current_user_email),
):
    """Cancel an event (organizer only)."""
    return event_service.cancel_event(db, event_id, actor_email)


@router.post("/{event_id}/finish", response_model=EventOut)
def finish_event(
    event_id: str,
    db: Session = Depends(get_db),
    actor_email: Optional[str] = Depends(current_user_email),
):
    """Close an approved event (organizer only)."""
    return event_service.finish_event(db, event_id, actor_email)
