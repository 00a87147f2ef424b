import base64
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Type, TypeVar

from google import genai
from google.genai import types
from openai import OpenAI
from pydantic import BaseModel

from ..settings import settings

logger = logging.getLogger("recipegen.ai")

T = TypeVar("T", bound=BaseModel)


class AIClient:
    """Gemini access. Every call returns None on failure and records last_error."""

    _instance = None

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.mode = settings.ai_mode  # "mock" or "live"
        self._client: Optional[genai.Client] = None
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None

        if self.mode == "live" and self.api_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(settings.provider_timeout_sec * 1000)),
            )

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self.mode == "live" and self._client is not None

    def _record_error(self, e: Exception) -> None:
        self.last_error = f"{e.__class__.__name__}: {str(e)}"
        self.last_error_at = datetime.now(timezone.utc)

    def generate_content_sync(
        self,
        prompt: str,
        response_model: Optional[Type[T]] = None,
        model: Optional[str] = None,
        system_instruction: Optional[str] = None
    ) -> Any:
        if not self.is_available():
            return None

        model_id = model or settings.gemini_text_model
        config = types.GenerateContentConfig(
            response_mime_type="application/json" if response_model else "text/plain",
            response_schema=response_model if response_model else None,
            system_instruction=system_instruction
        )

        try:
            response = self._client.models.generate_content(
                model=model_id,
                contents=prompt,
                config=config
            )
            return response.parsed if response_model else response.text
        except Exception as e:
            self._record_error(e)
            logger.error(f"Gemini generation failed: {e}")
            return None

    def describe_image_sync(
        self,
        image_base64: str,
        prompt: str,
        response_model: Type[T],
        mime_type: str = "image/jpeg",
        model: Optional[str] = None,
    ) -> Optional[T]:
        """Structured output for a single inline image."""
        if not self.is_available():
            return None

        try:
            image = types.Part.from_bytes(data=base64.b64decode(image_base64), mime_type=mime_type)
            response = self._client.models.generate_content(
                model=model or settings.gemini_vision_model,
                contents=[image, prompt],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=response_model,
                ),
            )
            return response.parsed
        except Exception as e:
            self._record_error(e)
            logger.error(f"Gemini vision request failed: {e}")
            return None


class OpenAIClient:
    """Thin wrapper over the openai SDK with the same availability contract."""

    _instance = None

    def __init__(self):
        self.api_key = settings.openai_api_key
        self.mode = settings.ai_mode
        self._client: Optional[OpenAI] = None
        self.last_error: Optional[str] = None

        if self.mode == "live" and self.api_key:
            self._client = OpenAI(api_key=self.api_key, timeout=settings.provider_timeout_sec)

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self.mode == "live" and self._client is not None

    def chat_json(self, messages: list[dict], model: Optional[str] = None, max_tokens: int = 1500) -> Optional[str]:
        """Run a chat completion constrained to a JSON object; returns the raw text."""
        if not self.is_available():
            return None

        try:
            chat = self._client.chat.completions.create(
                model=model or settings.openai_model,
                messages=messages,
                response_format={"type": "json_object"},
                temperature=0.7,
                max_tokens=max_tokens,
            )
            return chat.choices[0].message.content if chat and chat.choices else None
        except Exception as e:
            self.last_error = f"{e.__class__.__name__}: {str(e)}"
            logger.error(f"OpenAI chat completion failed: {e}")
            return None


# Singleton instance access
ai_client = AIClient.get_instance()
openai_client = OpenAIClient.get_instance()
