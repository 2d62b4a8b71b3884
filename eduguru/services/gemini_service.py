# /eduguru/services/gemini_service.py

import logging
from typing import Dict, List

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from ..core.config import settings
from ..core.errors import AIServiceUnavailableError

logger = logging.getLogger(__name__)

_configured = False


def is_enabled() -> bool:
    return bool(settings.gemini_api_key)


def _ensure_configured() -> None:
    global _configured
    if not is_enabled():
        raise AIServiceUnavailableError("GEMINI_API_KEY is not configured")
    if not _configured:
        genai.configure(api_key=settings.gemini_api_key)
        _configured = True


# --- CORE GENERATIVE FUNCTIONS ---

async def generate_text(prompt: str, temperature: float = 0.7) -> str:
    """Single-shot, text-only generation."""
    _ensure_configured()
    try:
        model = genai.GenerativeModel(settings.gemini_model)
        config = GenerationConfig(temperature=temperature)
        response = await model.generate_content_async(prompt, generation_config=config)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception:
        logger.exception("generate_text failed with the Gemini API")
        raise


def _to_gemini_history(history: List[Dict]) -> List[Dict]:
    # Gemini only knows the roles 'user' and 'model'.
    return [
        {"role": "user" if turn["role"] == "user" else "model", "parts": [turn["text"]]}
        for turn in history
    ]


async def chat(message: str, history: List[Dict], system_instruction: str) -> str:
    """Continues a conversation whose earlier turns are supplied by the client."""
    _ensure_configured()
    try:
        model = genai.GenerativeModel(settings.gemini_model, system_instruction=system_instruction)
        session = model.start_chat(history=_to_gemini_history(history))
        response = await session.send_message_async(message)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception:
        logger.exception("chat failed with the Gemini API")
        raise
