# /eduguru/models/report_model.py

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AttendanceRecapRow(BaseModel):
    studentId: str
    studentName: str
    nis: Optional[str] = None
    H: int = 0
    S: int = 0
    I: int = 0
    A: int = 0
    total: int = 0
    percentage: int = Field(0, description="Share of 'H' records, rounded to a whole percent.")


class AttendanceRecap(BaseModel):
    classId: str
    subject: Optional[str] = None
    months: List[int]
    rows: List[AttendanceRecapRow]
    summary: Dict[str, int]


class ScoreRecapRow(BaseModel):
    studentId: str
    studentName: str
    nis: Optional[str] = None
    formative: Dict[str, Optional[float]] = Field(default_factory=dict)
    portfolio: Dict[str, Optional[float]] = Field(default_factory=dict)
    summative: Dict[str, Optional[float]] = Field(default_factory=dict)
    sts: Optional[float] = None
    sas: Optional[float] = None
    average: float = 0
    notes: List[str] = Field(default_factory=list)


class ScoreRecap(BaseModel):
    classId: str
    subject: str
    months: List[int]
    formativeTitles: List[str]
    portfolioTitles: List[str]
    summativeTitles: List[str]
    rows: List[ScoreRecapRow]
