# /eduguru/models/dashboard_model.py

from typing import List

from pydantic import BaseModel, Field

from .journal_model import JournalEntry


class DashboardStats(BaseModel):
    """Headline numbers for the home screen."""
    studentCount: int = Field(..., description="Students owned by the teacher.")
    classCount: int = Field(..., description="Classes owned by the teacher.")
    journalCount: int = Field(..., description="Journal entries dated in the current month.")
    teachingHours: int = Field(..., description="Two teaching hours are counted per journal entry.")
    recentActivity: List[JournalEntry] = Field(default_factory=list)
