# /eduguru/models/counseling_model.py

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field

CounselingType = Literal["AKADEMIK", "PERILAKU", "PRIBADI", "SOSIAL"]


class CounselingSave(BaseModel):
    id: Optional[str] = None
    studentId: str = Field(..., min_length=1)
    date: dt.date
    type: CounselingType
    notes: Optional[str] = None
    followUp: Optional[str] = None
    aiSuggestion: Optional[str] = None
    isPrivate: bool = False


class CounselingSession(CounselingSave):
    id: str
    studentName: Optional[str] = None
