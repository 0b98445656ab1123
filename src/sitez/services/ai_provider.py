# src/sitez/services/ai_provider.py
"""LLM providers that return schema-constrained JSON text."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from ..utils.config import DEFAULT_AI_MODEL

log = logging.getLogger(__name__)


class AIProvider(ABC):
    """Abstract base class for generative providers."""

    @abstractmethod
    def generate_json(self, prompt: str, schema: Dict[str, Any]) -> str:
        """
        Send one prompt and return the raw JSON text of the reply.

        Args:
            prompt: Natural-language instruction
            schema: Response schema the reply must conform to

        Returns:
            The response body as text (not yet parsed)
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""


class ProviderNotConfiguredError(RuntimeError):
    pass


class GeminiProvider(AIProvider):
    """Google Gemini via the google-genai client, JSON response mode."""

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_AI_MODEL):
        self.api_key = api_key
        self.model = model
        self._client = genai.Client(api_key=api_key) if api_key else None

    @property
    def name(self) -> str:
        return "gemini"

    def generate_json(self, prompt: str, schema: Dict[str, Any]) -> str:
        if self._client is None:
            raise ProviderNotConfiguredError("GEMINI_API_KEY is not set")
        log.debug("gemini request model=%s prompt_chars=%d", self.model, len(prompt))
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text
