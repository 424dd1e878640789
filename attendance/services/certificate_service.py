"""Certificate issuance and public lookup.

Issuance walks an event's confirmed enrollments, keeps the participants whose
attendance reaches the eligibility threshold, and upserts one certificate per
(event, participant). Every run gives each certificate a fresh validation code
and content hash; the hash mixes a timestamp and a random nonce, so it cannot
be derived from public identity fields.
"""
import hashlib
import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance.database import upsert
from attendance.models.certificate import Certificate
from attendance.models.enrollment import Enrollment, EnrollmentStatus
from attendance.models.event import Event
from attendance.models.user import User
from attendance.schemas.certificate import CertificateView, IssuanceSummary
from attendance.services import eligibility_service

logger = logging.getLogger(__name__)

NOT_INFORMED = "Not informed"
_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def make_validation_code(event: Event) -> str:
    """Shareable code such as CERT-AB12CD-7KQ2M9XP; readable, not a secret."""
    suffix = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(8))
    return f"CERT-{event.join_code}-{suffix}"


def make_content_hash(user_email: str, event: Event, issued_at: datetime) -> str:
    nonce = secrets.token_hex(16)
    material = "|".join([user_email, event.event_id, event.title, issued_at.isoformat(), nonce])
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def _issue_one(db: Session, event: Event, user_email: str, user_name: str) -> None:
    issued_at = datetime.now(timezone.utc)
    upsert(
        db,
        Certificate,
        {
            "event_id": event.event_id,
            "user_email": user_email,
            "user_name": user_name,
            "validation_code": make_validation_code(event),
            "content_hash": make_content_hash(user_email, event, issued_at),
            "issued_at": issued_at,
        },
        conflict_columns=["event_id", "user_email"],
        update_columns=["user_name", "validation_code", "content_hash", "issued_at"],
    )


def issue_for_event(db: Session, event_id: str) -> IssuanceSummary:
    """Issue or refresh certificates for every eligible confirmed participant.

    Works on whatever attendance exists at call time, whatever the event
    status. Each participant is handled in its own savepoint: a failed upsert
    is logged and counted, and the rest of the batch carries on.
    """
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    rows = (
        db.query(Enrollment, User)
        .outerjoin(User, User.email == Enrollment.user_email)
        .filter(Enrollment.event_id == event_id, Enrollment.status == EnrollmentStatus.confirmed)
        .order_by(Enrollment.user_email)
        .all()
    )

    summary = IssuanceSummary(event_id=event_id)
    for enrollment, user in rows:
        email = enrollment.user_email
        result = eligibility_service.eligibility(db, event, email)
        if not result.eligible:
            summary.skipped_count += 1
            summary.skipped_emails.append(email)
            continue

        try:
            with db.begin_nested():
                _issue_one(db, event, email, user.full_name if user else email)
        except SQLAlchemyError:
            logger.exception("Certificate upsert failed for %s at event %s", email, event_id)
            summary.failed_count += 1
            summary.skipped_count += 1
            summary.failed_emails.append(email)
            continue

        summary.issued_count += 1
        summary.issued_emails.append(email)

    db.commit()
    logger.info(
        "Certificate issuance for event %s: %d issued, %d skipped (%d failed)",
        event_id, summary.issued_count, summary.skipped_count, summary.failed_count,
    )
    return summary


def list_for_event(db: Session, event_id: str) -> list[Certificate]:
    return (
        db.query(Certificate)
        .filter(Certificate.event_id == event_id)
        .order_by(Certificate.issued_at.desc(), Certificate.user_email)
        .all()
    )


def resolve(db: Session, code_or_hash: str) -> Optional[CertificateView]:
    """Find a certificate by content hash, then by validation code. Exact match only."""
    key = (code_or_hash or "").strip()
    if not key:
        return None

    cert = db.query(Certificate).filter(Certificate.content_hash == key).first()
    if cert is None:
        cert = db.query(Certificate).filter(Certificate.validation_code == key).first()
    if cert is None:
        return None

    event = db.query(Event).filter(Event.event_id == cert.event_id).first()
    user = db.query(User).filter(User.email == cert.user_email).first()
    coordinator = event.coordinator if event else None

    return CertificateView(
        validation_code=cert.validation_code,
        content_hash=cert.content_hash,
        issued_at=cert.issued_at,
        user_name=cert.user_name,
        user_email=cert.user_email,
        user_registration_number=(user.registration_number if user else None) or NOT_INFORMED,
        user_campus=(user.campus if user else None) or NOT_INFORMED,
        event_title=event.title if event else NOT_INFORMED,
        event_campus=(event.campus if event else None) or NOT_INFORMED,
        event_start_date=event.start_date if event else None,
        event_end_date=event.end_date if event else None,
        workload_hours=event.workload_hours if event else None,
        coordinator_name=coordinator.name if coordinator else NOT_INFORMED,
        coordinator_description=(coordinator.description if coordinator else None) or NOT_INFORMED,
    )
