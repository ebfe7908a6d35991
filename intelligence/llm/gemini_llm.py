"""
Google Gemini LLM
Selection oracle backed by the Gemini API
"""
from typing import List, Optional
import logging

from .base import BaseLLM, Message, MessageRole, LLMResponse
from utils.exceptions import ConfigurationError, LLMError


logger = logging.getLogger(__name__)


class GeminiLLM(BaseLLM):
    """
    Google Gemini implementation

    Default model: gemini-2.5-flash
    """

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        api_key: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 8192,
        timeout: float = 60.0,
        **kwargs,
    ):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")
        super().__init__(model, temperature, max_tokens, timeout, **kwargs)
        self.api_key = api_key

    @property
    def provider(self) -> str:
        return "gemini"

    def _convert_messages(self, messages: List[Message]) -> tuple:
        """
        Split messages into Gemini's shape

        Returns:
            (system_instruction, contents)
        """
        system_parts = []
        contents = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_parts.append(msg.content)
            elif msg.role == MessageRole.USER:
                contents.append({"role": "user", "parts": [msg.content]})

        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, contents

    async def acomplete(
        self,
        messages: List[Message],
        **kwargs,
    ) -> LLMResponse:
        import google.generativeai as genai

        genai.configure(api_key=self.api_key)

        system_instruction, contents = self._convert_messages(messages)

        generation_config = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if kwargs.get("json_mode"):
            generation_config["response_mime_type"] = "application/json"

        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config=generation_config,
            system_instruction=system_instruction,
        )

        try:
            response = await model.generate_content_async(
                contents,
                request_options={"timeout": self.timeout},
            )
        except Exception as e:
            raise LLMError(f"Gemini request failed: {e}", provider=self.provider) from e

        # .text raises when the candidate was blocked or carries no parts
        try:
            content = response.text or ""
        except ValueError as e:
            logger.warning(f"[Gemini] Empty or blocked response: {e}")
            content = ""

        usage = {}
        if getattr(response, "usage_metadata", None):
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count,
                "completion_tokens": response.usage_metadata.candidates_token_count,
                "total_tokens": response.usage_metadata.total_token_count,
            }

        return LLMResponse(
            content=content,
            model=self.model,
            usage=usage,
            finish_reason=response.candidates[0].finish_reason.name if response.candidates else None,
            raw_response=response,
        )
