"""Per-day check-in keywords.

An organizer generates one keyword per event day, on demand. Regenerating a
day's keyword overwrites the stored value, so the previous keyword stops
working immediately.
"""
import logging
import secrets
from datetime import date, datetime
from typing import Optional

import pytz
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from attendance.config import settings
from attendance.database import upsert
from attendance.models.day_keyword import DayKeyword
from attendance.models.event import Event

logger = logging.getLogger(__name__)

KEYWORD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
KEYWORD_LENGTH = 6
# Keywords are not unique across events or dates. 36**6 (~2.1e9) values make
# a collision unlikely, and a collision is harmless because lookups are
# always scoped to one event.


def random_keyword(length: int = KEYWORD_LENGTH) -> str:
    return "".join(secrets.choice(KEYWORD_ALPHABET) for _ in range(length))


def normalize_keyword(keyword: str) -> str:
    return (keyword or "").strip().upper()


def today_for_campus() -> date:
    """Current calendar date in the campus time zone."""
    tz = pytz.timezone(settings.CAMPUS_TIMEZONE)
    return datetime.now(tz).date()


def day_index_for_date(event: Event, keyword_date: date) -> int:
    """1-based offset of keyword_date from the event's first day."""
    return (keyword_date - event.start_date).days + 1


def event_days(event: Event) -> list[date]:
    return [date.fromordinal(event.start_date.toordinal() + i) for i in range(event.total_calendar_days)]


def _get_event_or_404(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def _store(db: Session, event_id: str, keyword_date: date, keyword: str, overwrite: bool = True) -> None:
    upsert(
        db,
        DayKeyword,
        {"event_id": event_id, "keyword_date": keyword_date, "keyword": keyword},
        conflict_columns=["event_id", "keyword_date"],
        update_columns=["keyword"] if overwrite else [],
    )


def generate(db: Session, event_id: str, keyword_date: Optional[date] = None) -> DayKeyword:
    """Create or replace the keyword for one day of an event."""
    event = _get_event_or_404(db, event_id)
    keyword_date = keyword_date or today_for_campus()

    if not (event.start_date <= keyword_date <= event.end_date):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{keyword_date.isoformat()} is outside the event ({event.start_date} to {event.end_date})",
        )

    _store(db, event_id, keyword_date, random_keyword())
    db.commit()

    stored = (
        db.query(DayKeyword)
        .filter(DayKeyword.event_id == event_id, DayKeyword.keyword_date == keyword_date)
        .populate_existing()
        .one()
    )
    logger.info("Generated keyword for event %s day %d (%s)", event_id,
                day_index_for_date(event, keyword_date), keyword_date)
    return stored


def generate_missing(db: Session, event_id: str) -> list[DayKeyword]:
    """Generate keywords for every event day that has none yet; existing ones are kept."""
    event = _get_event_or_404(db, event_id)
    existing = {
        row.keyword_date
        for row in db.query(DayKeyword.keyword_date).filter(DayKeyword.event_id == event_id)
    }
    missing = [d for d in event_days(event) if d not in existing]

    # A keyword written concurrently for one of these days wins
    for keyword_date in missing:
        _store(db, event_id, keyword_date, random_keyword(), overwrite=False)
    db.commit()

    logger.info("Generated %d missing keywords for event %s", len(missing), event_id)
    return list_for_event(db, event_id)


def list_for_event(db: Session, event_id: str) -> list[DayKeyword]:
    _get_event_or_404(db, event_id)
    return (
        db.query(DayKeyword)
        .filter(DayKeyword.event_id == event_id)
        .order_by(DayKeyword.keyword_date)
        .all()
    )


def lookup(db: Session, event_id: str, keyword: str) -> Optional[date]:
    """Return the date a keyword is valid for, or None if it is not current for this event.

    A None result is the ordinary "invalid keyword" outcome. Database errors
    are not caught here and reach the caller as SQLAlchemyError.
    """
    normalized = normalize_keyword(keyword)
    if not normalized:
        return None
    row = (
        db.query(DayKeyword)
        .filter(DayKeyword.event_id == event_id, DayKeyword.keyword == normalized)
        .order_by(DayKeyword.keyword_date)
        .first()
    )
    return row.keyword_date if row else None
