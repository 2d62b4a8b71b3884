# /eduguru/models/attendance_model.py

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

AttendanceStatus = Literal["H", "S", "I", "A"]


class AttendanceRow(BaseModel):
    id: Optional[str] = None
    date: dt.date
    studentId: str = Field(..., min_length=1)
    classId: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    status: AttendanceStatus


class AttendanceRecord(AttendanceRow):
    id: str


class AttendanceBulkRequest(BaseModel):
    records: List[AttendanceRow] = Field(default_factory=list)
