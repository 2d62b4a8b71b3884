# /eduguru/models/ai_model.py

from typing import List, Literal

from pydantic import BaseModel, Field


class ReflectionRequest(BaseModel):
    objective: str = ""
    activities: str = ""
    engagement: str = ""


class TeachingMethodsRequest(BaseModel):
    topic: str = Field(..., min_length=1)
    grade: str = ""


class FollowUpRequest(BaseModel):
    studentName: str = Field(..., min_length=1)
    type: str = ""
    notes: str = ""


class ChatTurn(BaseModel):
    role: Literal["user", "model", "assistant"]
    text: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    history: List[ChatTurn] = Field(default_factory=list)


class AIResponse(BaseModel):
    text: str
