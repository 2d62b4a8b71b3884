# /eduguru/models/import_model.py

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .class_model import ClassCreate
from .student_model import StudentCreate


class BulkImportResponse(BaseModel):
    success: bool = True
    imported: int = 0
    invalidClassRefs: int = 0


class MasterSyncRequest(BaseModel):
    classes: List[ClassCreate] = Field(default_factory=list)
    students: List[StudentCreate] = Field(default_factory=list)
    subjects: List[Any] = Field(default_factory=list)


class MasterSyncResponse(BaseModel):
    success: bool = True
    imported: Dict[str, int]
    invalidClassRefs: int = 0
