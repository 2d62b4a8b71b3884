# /eduguru/models/journal_model.py

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class JournalBase(BaseModel):
    date: dt.date
    classId: Optional[str] = None
    subject: Optional[str] = None
    startTime: Optional[str] = Field(default=None, description="Time-slot label, e.g. '07:30'.")
    learningObjective: Optional[str] = None
    materials: Optional[str] = None
    method: Optional[str] = None
    activities: Optional[str] = None
    reflection: Optional[str] = None
    engagementLevel: Optional[str] = None


class JournalSave(JournalBase):
    id: Optional[str] = None
    createdAt: Optional[int] = Field(default=None, description="Epoch milliseconds.")


class JournalEntry(JournalBase):
    id: str
    createdAt: Optional[int] = None
