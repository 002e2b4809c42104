"""AI Client: Narrative text generation for coaching.

The coaching service depends only on the NarrativeClient protocol
(prompt in, text out). GeminiNarrativeClient implements it with the
google-genai SDK; tests substitute a fake.
"""

import logging
from typing import Protocol

from trade_journal.infrastructure.config import JournalConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class NarrativeClientError(Exception):
    """Raised when the narrative backend cannot produce text."""


class NarrativeClient(Protocol):
    """Anything that turns a prompt into narrative text."""

    def generate(self, prompt: str) -> str:
        """Generate text for a prompt.

        Raises:
            NarrativeClientError: On any backend failure
        """
        ...


class GeminiNarrativeClient:
    """NarrativeClient backed by Google Gemini.

    The SDK client is created on first use, so constructing this class
    never requires credentials.

    Example:
        >>> client = GeminiNarrativeClient()
        >>> text = client.generate("Summarize my week of trading")
    """

    def __init__(
        self,
        config: JournalConfig = DEFAULT_CONFIG,
        api_key: str | None = None,
    ):
        self._config = config
        self._api_key = api_key
        self._client = None

    def _get_client(self):
        if self._client is None:
            from google import genai

            api_key = self._api_key or self._config.api_key()
            if not api_key:
                raise NarrativeClientError(
                    f"No API key set (checked {', '.join(self._config.ai_api_key_env)})"
                )
            self._client = genai.Client(api_key=api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        """Generate text with the configured Gemini model."""
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self._config.ai_model,
                contents=prompt,
            )
        except Exception as e:
            raise NarrativeClientError(f"Gemini request failed: {e}") from e

        logger.debug("Gemini returned %d chars", len(response.text or ""))
        return response.text or ""
