"""
Intelligence Module
Generative-model clients used by the selection stage
"""
from .llm import (
    BaseLLM,
    GeminiLLM,
    LLMResponse,
    Message,
    get_llm,
)

__all__ = [
    "BaseLLM",
    "GeminiLLM",
    "LLMResponse",
    "Message",
    "get_llm",
]
