# /eduguru/models/score_model.py

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

AssessmentType = Literal["FORMATIVE", "SUMMATIVE", "STS", "SAS", "PORTFOLIO", "NOTE"]


class ScoreRow(BaseModel):
    id: Optional[str] = None
    studentId: str = Field(..., min_length=1)
    classId: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    type: AssessmentType
    # NOTE entries carry text only, so the value may be absent.
    score: Optional[float] = Field(default=None, ge=0, le=100)
    assessmentTitle: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class StudentScore(ScoreRow):
    id: str


class ScoreBulkRequest(BaseModel):
    scores: List[ScoreRow] = Field(default_factory=list)
