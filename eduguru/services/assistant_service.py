# /eduguru/services/assistant_service.py

"""Fills the prompt templates and forwards them to the Gemini wrapper."""

from ..models import ai_model
from . import gemini_service, prompt_library


async def write_reflection(request: ai_model.ReflectionRequest) -> str:
    prompt = prompt_library.JOURNAL_REFLECTION_PROMPT.format(
        objective=request.objective or "-",
        activities=request.activities or "-",
        engagement=request.engagement or "-",
    )
    return await gemini_service.generate_text(prompt)


async def suggest_teaching_methods(request: ai_model.TeachingMethodsRequest) -> str:
    prompt = prompt_library.TEACHING_METHODS_PROMPT.format(topic=request.topic, grade=request.grade or "-")
    return await gemini_service.generate_text(prompt, temperature=0.9)


async def suggest_follow_up(request: ai_model.FollowUpRequest) -> str:
    prompt = prompt_library.COUNSELING_FOLLOW_UP_PROMPT.format(
        student_name=request.studentName,
        counseling_type=request.type or "-",
        notes=request.notes or "-",
    )
    return await gemini_service.generate_text(prompt, temperature=0.5)


async def chat(request: ai_model.ChatRequest) -> str:
    history = [turn.model_dump() for turn in request.history]
    return await gemini_service.chat(
        message=request.message,
        history=history,
        system_instruction=prompt_library.ASSISTANT_SYSTEM_INSTRUCTION,
    )
