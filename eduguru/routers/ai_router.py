# /eduguru/routers/ai_router.py

from fastapi import APIRouter, Depends

from ..core.deps import CurrentUser, get_current_user
from ..models import ai_model
from ..services import assistant_service

# Stateless: none of these endpoints touch the database.
router = APIRouter()


@router.post("/reflection", response_model=ai_model.AIResponse, summary="Draft a journal reflection")
async def reflection(request: ai_model.ReflectionRequest, current_user: CurrentUser = Depends(get_current_user)):
    return {"text": await assistant_service.write_reflection(request)}


@router.post("/teaching-methods", response_model=ai_model.AIResponse, summary="Suggest teaching methods for a topic")
async def teaching_methods(request: ai_model.TeachingMethodsRequest, current_user: CurrentUser = Depends(get_current_user)):
    return {"text": await assistant_service.suggest_teaching_methods(request)}


@router.post("/follow-up", response_model=ai_model.AIResponse, summary="Suggest a counseling follow-up plan")
async def follow_up(request: ai_model.FollowUpRequest, current_user: CurrentUser = Depends(get_current_user)):
    return {"text": await assistant_service.suggest_follow_up(request)}


@router.post("/chat", response_model=ai_model.AIResponse, summary="Chat with the teaching assistant")
async def chat(request: ai_model.ChatRequest, current_user: CurrentUser = Depends(get_current_user)):
    return {"text": await assistant_service.chat(request)}
