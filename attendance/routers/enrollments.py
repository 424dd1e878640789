"""Enrollment API routes, mounted under /api/events."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.models.enrollment import Enrollment
from attendance.models.user import User
from attendance.schemas.enrollment import EnrollmentCreate, EnrollmentOut, EnrollmentUpdate
from attendance.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/enrollments", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def enroll(event_id: str, payload: EnrollmentCreate, db: Session = Depends(get_db)):
    event = event_service.get_event_or_404(db, event_id)
    event_service.check_enrollment_open(event)
    email = payload.user_email.strip().lower()
    if not db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=404, detail="User not found")
    if db.query(Enrollment).filter(Enrollment.event_id == event_id, Enrollment.user_email == email).first():
        raise HTTPException(status_code=409, detail="User is already enrolled in this event")

    enrollment = Enrollment(event_id=event_id, user_email=email, status=payload.status)
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    logger.info("Enrolled %s in event %s (%s)", email, event_id, enrollment.status.value)
    return enrollment


@router.get("/{event_id}/enrollments", response_model=list[EnrollmentOut])
def list_enrollments(event_id: str, db: Session = Depends(get_db)):
    event_service.get_event_or_404(db, event_id)
    return db.query(Enrollment).filter(Enrollment.event_id == event_id).order_by(Enrollment.user_email).all()


@router.patch("/{event_id}/enrollments/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment(event_id: str, enrollment_id: str, payload: EnrollmentUpdate, db: Session = Depends(get_db)):
    """Confirm or cancel an enrollment."""
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.event_id == event_id, Enrollment.enrollment_id == enrollment_id)
        .first()
    )
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    enrollment.status = payload.status
    db.commit()
    db.refresh(enrollment)
    logger.info("Enrollment %s is now %s", enrollment_id, enrollment.status.value)
    return enrollment
