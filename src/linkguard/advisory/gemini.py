"""Google Gemini advisory integration."""

from __future__ import annotations

import logging

import requests

from linkguard.advisory.base import (
    EMPTY_RESPONSE_MESSAGE,
    FALLBACK_MESSAGE,
    BaseAdvisor,
    build_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"


class GeminiAdvisor(BaseAdvisor):
    """Ask a Gemini model for a short verdict on a URL.

    Uses the ``generateContent`` REST endpoint. Requires an API key.
    """

    name = "Gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 15,
        endpoint: str = DEFAULT_ENDPOINT,
    ) -> None:
        """Initialize with API key and model settings.

        Args:
            api_key: Gemini API key.
            model: Model identifier.
            timeout: Request timeout in seconds.
            endpoint: Base URL of the Generative Language API.
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = endpoint.rstrip("/")

    def advise(self, url: str, summary: str) -> str:
        """Request an assessment from Gemini.

        Args:
            url: The normalized URL that was scored.
            summary: Human-readable summary of the local checks.

        Returns:
            The model's text, ``EMPTY_RESPONSE_MESSAGE`` when the model
            returned nothing, or ``FALLBACK_MESSAGE`` on any error.
        """
        if not self.api_key:
            logger.warning("Gemini API key not configured; skipping advisory for %s", url)
            return FALLBACK_MESSAGE

        try:
            response = requests.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json={"contents": [{"parts": [{"text": build_prompt(url, summary)}]}]},
                timeout=self.timeout,
            )

            if response.status_code != 200:
                logger.error(
                    "Gemini advisory failed for %s: API returned status %s",
                    url, response.status_code,
                )
                return FALLBACK_MESSAGE

            text = _extract_text(response.json())
        except (requests.RequestException, ValueError, TypeError, AttributeError) as exc:
            logger.error("Gemini advisory failed for %s: %s", url, exc)
            return FALLBACK_MESSAGE

        return text or EMPTY_RESPONSE_MESSAGE


def _extract_text(data: dict) -> str:
    """Join the text parts of the first candidate in a generateContent reply.

    Args:
        data: Decoded JSON body.

    Returns:
        The concatenated text, or empty string when there is none.
    """
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()
