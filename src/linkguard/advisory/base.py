"""Base advisory interface for LinkGuard."""

from __future__ import annotations

from abc import ABC, abstractmethod

FALLBACK_MESSAGE = "AI analysis failed. Please rely on local heuristic checks."
EMPTY_RESPONSE_MESSAGE = "Unable to retrieve AI insights at this time."


class BaseAdvisor(ABC):
    """Abstract base class for advisory text providers.

    An advisor turns a URL and a summary of the local checks into a short
    natural-language assessment. Implementations must never raise: any
    failure is converted into ``FALLBACK_MESSAGE``.
    """

    name: str = ""

    @abstractmethod
    def advise(self, url: str, summary: str) -> str:
        """Produce advisory commentary for a scanned URL.

        Args:
            url: The normalized URL that was scored.
            summary: Human-readable ``name: status`` pairs from the checks.

        Returns:
            Free-text commentary, or a fallback string on failure.
        """
        ...


def build_prompt(url: str, summary: str) -> str:
    """Build the assessment prompt sent to a text-generation model."""
    return (
        "You are a cybersecurity expert. Provide a concise (2-3 sentence) "
        f"security assessment of this URL: {url}.\n"
        f"Our local checks found: {summary}.\n"
        'Give a clear "Safe", "Caution", or "Dangerous" verdict and explain why '
        "based on common phishing patterns.\n"
        "Keep it professional and helpful."
    )
