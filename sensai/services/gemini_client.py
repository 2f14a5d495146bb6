"""
Gemini API Client

Gemini exposes an OpenAI-compatible endpoint, so we use the openai library.

MODEL FALLBACK:
- Models are tried in the configured order
- An overloaded model (HTTP 503 / "overloaded") moves on to the next one
- Any other error is raised immediately
- When every model is overloaded, ModelsOverloadedError is raised
"""
import base64
import json
import logging
import re
from typing import List, Optional

from openai import APIStatusError, OpenAI

from sensai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json|latex|tex)?\n?")


class ModelsOverloadedError(Exception):
    """Raised when every model in the fallback list reported overload."""

    def __init__(self, models: List[str]):
        self.models = models
        super().__init__("All Gemini models are overloaded. Please try again later.")


def is_overload_error(error: Exception) -> bool:
    if isinstance(error, APIStatusError) and error.status_code == 503:
        return True
    message = str(error).lower()
    return "overloaded" in message or "503" in message


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model likes to wrap output in."""
    return _CODE_FENCE.sub("", text or "").strip()


class GeminiClient:
    """
    Wrapper for the Gemini API with the linear model fallback.
    """

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            max_retries=settings.ai_max_retries
        )
        self.models = list(settings.gemini_models)

    def _call_api(self, messages: list, model: str, max_tokens: Optional[int] = None,
                  temperature: Optional[float] = None) -> str:
        """
        Internal method to call the chat completions endpoint once.
        Returns raw text response.
        """
        kwargs = {"model": model, "messages": messages}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature
        response = self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""

    def _call_with_fallback(self, messages: list, models: Optional[List[str]] = None, **kwargs) -> str:
        candidates = models or self.models
        for model in candidates:
            try:
                return self._call_api(messages, model, **kwargs)
            except Exception as e:
                if is_overload_error(e):
                    logger.warning("Model %s overloaded, trying next: %s", model, e)
                    continue
                raise
        raise ModelsOverloadedError(candidates)

    def generate_text(self, prompt: str, models: Optional[List[str]] = None, **kwargs) -> str:
        """Send a single user prompt and return the response text."""
        messages = [{"role": "user", "content": prompt}]
        return self._call_with_fallback(messages, models, **kwargs)

    def generate_with_image(self, prompt: str, image_bytes: bytes, mime_type: str,
                            models: Optional[List[str]] = None, **kwargs) -> str:
        """Send a prompt plus an inline image (vision request)."""
        data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": data_url}}
            ]
        }]
        return self._call_with_fallback(messages, models, **kwargs)

    def extract_json(self, text: str):
        """
        Extract JSON from API response.
        Handles cases where model wraps JSON in markdown code blocks.
        """
        return json.loads(strip_code_fences(text))

    def test_connection(self) -> bool:
        """Test if Gemini API is reachable"""
        try:
            response = self.generate_text("Reply with exactly: OK", max_tokens=10)
            return "OK" in response.upper()
        except Exception as e:
            logger.error("Gemini connection failed: %s", e)
            return False


# Singleton instance
_gemini_client: GeminiClient = None


def get_gemini_client() -> GeminiClient:
    """Get or create Gemini client (singleton pattern)"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
