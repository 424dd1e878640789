"""Certificate eligibility from attendance records.

Always recomputed from attendance_records; no percentage is stored.

The denominator is chosen once, by settings.ELIGIBILITY_DENOMINATOR, and used
for every caller:

- "calendar_span": number of calendar days from start_date to end_date
- "recorded_days": number of distinct day indexes on which anyone checked in
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from attendance.config import settings
from attendance.models.attendance_record import AttendanceRecord
from attendance.models.event import Event

logger = logging.getLogger(__name__)

CALENDAR_SPAN = "calendar_span"
RECORDED_DAYS = "recorded_days"


@dataclass
class EligibilityResult:
    days_present: int
    total_days: int
    percentage: int
    eligible: bool


def total_days(db: Session, event: Event, policy: Optional[str] = None) -> int:
    policy = policy or settings.ELIGIBILITY_DENOMINATOR
    if policy == CALENDAR_SPAN:
        days = event.total_calendar_days
    elif policy == RECORDED_DAYS:
        days = (
            db.query(func.count(func.distinct(AttendanceRecord.day_index)))
            .filter(AttendanceRecord.event_id == event.event_id)
            .scalar()
        )
    else:
        raise ValueError(f"Unknown eligibility denominator policy: {policy}")
    return max(days or 0, 1)


def days_present(db: Session, event_id: str, user_email: str) -> int:
    return (
        db.query(func.count(AttendanceRecord.record_id))
        .filter(AttendanceRecord.event_id == event_id, AttendanceRecord.user_email == user_email)
        .scalar()
    ) or 0


def _percent(present: int, total: int) -> int:
    # Half-up rounding on integers; round() would round 12.5 down to 12
    return min((200 * present + total) // (2 * total), 100)


def eligibility(
    db: Session,
    event: Event,
    user_email: str,
    policy: Optional[str] = None,
    threshold_percent: Optional[int] = None,
) -> EligibilityResult:
    """Attendance ratio of one participant and whether it reaches the threshold.

    The decision compares the exact ratio, so the displayed percentage being
    rounded up to the threshold never makes a participant eligible.
    """
    threshold = settings.ELIGIBILITY_THRESHOLD_PERCENT if threshold_percent is None else threshold_percent
    total = total_days(db, event, policy)
    present = days_present(db, event.event_id, user_email)
    return EligibilityResult(
        days_present=present,
        total_days=total,
        percentage=_percent(present, total),
        eligible=100 * present >= threshold * total,
    )


def eligibility_ratio(db: Session, event: Event, user_email: str) -> int:
    return eligibility(db, event, user_email).percentage
