# /eduguru/models/class_model.py

from typing import List, Optional

from pydantic import BaseModel, Field


class ClassBase(BaseModel):
    name: str = Field(..., min_length=1, description="Display name, e.g. 'X IPA 1'.")
    grade: Optional[int] = Field(default=None, description="Grade level (tingkat), e.g. 10.")


class ClassCreate(ClassBase):
    id: Optional[str] = Field(default=None, description="Class code. Generated when omitted.")


class ClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    grade: Optional[int] = None


class Class(ClassBase):
    id: str
    studentCount: int = 0


class ClassBulkRequest(BaseModel):
    classes: List[ClassCreate] = Field(default_factory=list)
