"""Day keyword API routes, mounted under /api/events."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.models.day_keyword import DayKeyword
from attendance.models.event import Event
from attendance.schemas.keyword import KeywordGenerate, KeywordOut
from attendance.services import event_service, keyword_service

logger = logging.getLogger(__name__)
router = APIRouter()


def _out(event: Event, row: DayKeyword) -> KeywordOut:
    return KeywordOut(
        event_id=row.event_id,
        keyword_date=row.keyword_date,
        keyword=row.keyword,
        day_index=keyword_service.day_index_for_date(event, row.keyword_date),
    )


@router.post("/{event_id}/keywords", response_model=KeywordOut, status_code=status.HTTP_201_CREATED)
def generate_keyword(event_id: str, payload: Optional[KeywordGenerate] = None, db: Session = Depends(get_db)):
    """Generate, or regenerate, the keyword for one day (default: today on campus)."""
    row = keyword_service.generate(db, event_id, payload.keyword_date if payload else None)
    return _out(event_service.get_event_or_404(db, event_id), row)


@router.post("/{event_id}/keywords/missing", response_model=list[KeywordOut])
def generate_missing_keywords(event_id: str, db: Session = Depends(get_db)):
    """Fill in keywords for every event day that has none."""
    rows = keyword_service.generate_missing(db, event_id)
    event = event_service.get_event_or_404(db, event_id)
    return [_out(event, row) for row in rows]


@router.get("/{event_id}/keywords", response_model=list[KeywordOut])
def list_keywords(event_id: str, db: Session = Depends(get_db)):
    rows = keyword_service.list_for_event(db, event_id)
    event = event_service.get_event_or_404(db, event_id)
    return [_out(event, row) for row in rows]
