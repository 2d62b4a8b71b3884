# /eduguru/models/student_model.py

from typing import List, Optional

from pydantic import BaseModel, Field


class StudentBase(BaseModel):
    name: str = Field(..., min_length=1, description="The full name of the student.")
    nis: Optional[str] = Field(default=None, description="National student number.")
    classId: Optional[str] = Field(default=None, description="Class code, or empty when unassigned.")


class StudentCreate(StudentBase):
    id: Optional[str] = None


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    nis: Optional[str] = None
    classId: Optional[str] = None


class Student(StudentBase):
    id: str
    className: Optional[str] = None


class StudentBulkRequest(BaseModel):
    students: List[StudentCreate] = Field(default_factory=list)
    # Set on the second request of the invalid-class confirmation round-trip.
    confirm: bool = False
