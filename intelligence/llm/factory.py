"""
LLM Factory
Builds the selection oracle from settings
"""
from typing import Optional
import logging

from .base import BaseLLM
from .gemini_llm import GeminiLLM
from config import Settings, get_settings


logger = logging.getLogger(__name__)


def get_llm(settings: Optional[Settings] = None, **kwargs) -> BaseLLM:
    """
    Build a new oracle instance

    Reads ``GEMINI_*`` settings; keyword arguments override them.

    Raises:
        ConfigurationError: when no Gemini API key is available

    Example:
        llm = get_llm()
        llm = get_llm(model="gemini-2.5-pro", temperature=0.2)
    """
    gemini = (settings or get_settings()).gemini

    params = {
        "model": gemini.model_name,
        "api_key": gemini.api_key,
        "temperature": gemini.temperature,
        "max_tokens": gemini.max_tokens,
    }
    params.update(kwargs)

    llm = GeminiLLM(**params)
    logger.debug(f"Selection oracle ready: {llm!r}")
    return llm
