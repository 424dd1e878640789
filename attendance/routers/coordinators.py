"""Coordinator directory API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.models.coordinator import Coordinator
from attendance.schemas.event import CoordinatorCreate, CoordinatorOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=CoordinatorOut, status_code=status.HTTP_201_CREATED)
def create_coordinator(payload: CoordinatorCreate, db: Session = Depends(get_db)):
    """Register an academic coordinator who can be attached to events on approval."""
    coordinator = Coordinator(**payload.model_dump())
    db.add(coordinator)
    db.commit()
    db.refresh(coordinator)
    logger.info("Created coordinator %s (%s)", coordinator.name, coordinator.coordinator_id)
    return coordinator


@router.get("/", response_model=list[CoordinatorOut])
def list_coordinators(db: Session = Depends(get_db)):
    return db.query(Coordinator).order_by(Coordinator.name).all()
