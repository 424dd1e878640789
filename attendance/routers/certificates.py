"""Certificate API routes: eligibility, bulk issuance and public verification."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.schemas.certificate import CertificateOut, CertificateView, EligibilityOut, IssuanceSummary
from attendance.services import certificate_service, eligibility_service, event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/events/{event_id}/eligibility/{user_email}", response_model=EligibilityOut)
def get_eligibility(event_id: str, user_email: str, db: Session = Depends(get_db)):
    event = event_service.get_event_or_404(db, event_id)
    email = user_email.strip().lower()
    result = eligibility_service.eligibility(db, event, email)
    return EligibilityOut(
        event_id=event_id,
        user_email=email,
        days_present=result.days_present,
        total_days=result.total_days,
        percentage=result.percentage,
        eligible=result.eligible,
    )


@router.post("/events/{event_id}/certificates/issue", response_model=IssuanceSummary)
def issue_certificates(event_id: str, db: Session = Depends(get_db)):
    """Issue or refresh certificates for every eligible participant of the event."""
    return certificate_service.issue_for_event(db, event_id)


@router.get("/events/{event_id}/certificates", response_model=list[CertificateOut])
def list_certificates(event_id: str, db: Session = Depends(get_db)):
    event_service.get_event_or_404(db, event_id)
    return certificate_service.list_for_event(db, event_id)


@router.get("/certificates/verify/{code_or_hash}", response_model=CertificateView)
def verify_certificate(code_or_hash: str, db: Session = Depends(get_db)):
    """Public verification by content hash or validation code."""
    view = certificate_service.resolve(db, code_or_hash)
    if view is None:
        raise HTTPException(status_code=404, detail="Certificate not found")
    return view
