# review_advisor/generation/client.py
"""
Text generation client for a local Ollama server.

One synchronous, non-streaming request per call. Failures are raised as
GenerationFailed; there is no transport retry at this layer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from review_advisor.config import Settings, get_settings
from review_advisor.errors import GenerationFailed
from review_advisor.generation.models import GenerationRequest

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """Abstract base class for prompt-in, text-out generators."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Generate a completion for the prompt."""


class OllamaClient(TextGenerator):
    """Ollama /api/generate client."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
        *,
        url: Optional[str] = None,
        model: Optional[str] = None,
    ):
        """
        Initialize the Ollama client.

        Args:
            settings: Source of endpoint URL, model and timeout
            client: Optional pre-built httpx client (tests use a mock transport)
            url: Full generate endpoint, overriding settings
            model: Model identifier, overriding settings
        """
        settings = settings or get_settings()
        self.url = url or settings.ollama_url
        self.model = model or settings.ollama_model
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=settings.generation_timeout_seconds
        )
        logger.info(f"Initialized Ollama client with model: {self.model} at {self.url}")

    def generate(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Returns:
            The trimmed ``response`` field; empty when the field is absent

        Raises:
            GenerationFailed: On transport error, non-200 status or malformed body
        """
        request = GenerationRequest(model=self.model, prompt=prompt)

        try:
            response = self._client.post(self.url, json=request.to_payload())
        except httpx.HTTPError as exc:
            logger.error(f"Generation request failed: {exc}")
            raise GenerationFailed(None, str(exc)) from exc

        if response.status_code != 200:
            logger.error(f"Generation endpoint returned HTTP {response.status_code}")
            raise GenerationFailed(response.status_code, response.text)

        # ValueError covers both invalid JSON and undecodable bytes
        try:
            data = response.json()
        except ValueError as exc:
            raise GenerationFailed(response.status_code, response.text) from exc
        if not isinstance(data, dict):
            raise GenerationFailed(response.status_code, response.text)

        content = data.get("response")
        if content is None:
            logger.warning("Generation response carried no text")
            return ""
        if not isinstance(content, str):
            raise GenerationFailed(response.status_code, response.text)
        return content.strip()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
