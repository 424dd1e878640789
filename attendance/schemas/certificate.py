"""Pydantic schemas for certificates, eligibility and public verification."""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class EligibilityOut(BaseModel):
    event_id: str
    user_email: str
    days_present: int
    total_days: int
    percentage: int
    eligible: bool


class IssuanceSummary(BaseModel):
    event_id: str
    issued_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    issued_emails: list[str] = []
    skipped_emails: list[str] = []
    failed_emails: list[str] = []


class CertificateOut(BaseModel):
    certificate_id: str
    event_id: str
    user_email: str
    user_name: str
    validation_code: str
    content_hash: str
    issued_at: datetime

    model_config = {"from_attributes": True}


class CertificateView(BaseModel):
    """Denormalized certificate data for public verification pages."""
    validation_code: str
    content_hash: str
    issued_at: datetime
    user_name: str
    user_email: str
    user_registration_number: str
    user_campus: str
    event_title: str
    event_campus: str
    event_start_date: Optional[date] = None
    event_end_date: Optional[date] = None
    workload_hours: Optional[int] = None
    coordinator_name: str
    coordinator_description: str
