"""Pydantic schemas for Users."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    email: str
    full_name: str
    registration_number: Optional[str] = None
    campus: Optional[str] = None


class UserOut(BaseModel):
    email: str
    full_name: str
    registration_number: Optional[str] = None
    campus: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
