"""User directory API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from attendance.database import get_db
from attendance.models.user import User
from attendance.schemas.user import UserCreate, UserOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a participant in the directory used to resolve public check-ins."""
    data = payload.model_dump()
    data["email"] = data["email"].strip().lower()
    if db.query(User).filter(User.email == data["email"]).first():
        raise HTTPException(status_code=409, detail="A user with this email already exists")
    if data["registration_number"] and (
        db.query(User).filter(User.registration_number == data["registration_number"]).first()
    ):
        raise HTTPException(status_code=409, detail="A user with this registration number already exists")

    user = User(**data)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s", user.email)
    return user


@router.get("/{email}", response_model=UserOut)
def get_user(email: str, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
