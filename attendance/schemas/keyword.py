"""Pydantic schemas for day keywords."""
from datetime import date
from typing import Optional
from pydantic import BaseModel


class KeywordGenerate(BaseModel):
    keyword_date: Optional[date] = None  # defaults to today on campus


class KeywordOut(BaseModel):
    event_id: str
    keyword_date: date
    keyword: str
    day_index: int
