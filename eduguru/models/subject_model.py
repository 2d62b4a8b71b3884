# /eduguru/models/subject_model.py

from typing import Any, List

from pydantic import BaseModel, Field


class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=1)


class SubjectBulkRequest(BaseModel):
    # Bare strings or {"name": ...} objects; blanks are dropped server-side.
    subjects: List[Any] = Field(default_factory=list)
