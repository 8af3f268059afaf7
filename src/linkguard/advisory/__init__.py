"""LinkGuard advisory providers."""

from __future__ import annotations

import logging
from typing import Any

from linkguard.advisory.base import FALLBACK_MESSAGE, BaseAdvisor
from linkguard.advisory.gemini import GeminiAdvisor
from linkguard.config import get_api_key, load_config

logger = logging.getLogger(__name__)

ADVISORS: dict[str, type[BaseAdvisor]] = {
    "gemini": GeminiAdvisor,
}


def build_advisor(config: dict[str, Any]) -> BaseAdvisor | None:
    """Create the advisor named in the ``advisory`` config section.

    Args:
        config: The loaded configuration dictionary.

    Returns:
        The configured advisor, or None when advisories are disabled.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    advisory_cfg = config.get("advisory", {})
    if not advisory_cfg.get("enabled", True):
        return None

    provider = advisory_cfg.get("provider", "gemini")
    if provider not in ADVISORS:
        raise ValueError(f"Unknown advisory provider: {provider!r}")

    kwargs: dict[str, Any] = {"api_key": get_api_key(config, provider)}
    for key in ("model", "timeout", "endpoint"):
        if advisory_cfg.get(key):
            kwargs[key] = advisory_cfg[key]
    return ADVISORS[provider](**kwargs)


def get_advisory(url: str, summary: str, config: dict[str, Any] | None = None) -> str:
    """Fetch advisory commentary for a URL. Never raises.

    Args:
        url: The normalized URL that was scored.
        summary: Human-readable summary of the local checks.
        config: The loaded configuration dictionary. Loaded from the
            default locations when omitted.

    Returns:
        Advisory text, or ``FALLBACK_MESSAGE`` when no advisor is available.
    """
    try:
        if config is None:
            config = load_config()
        advisor = build_advisor(config)
        if advisor is None:
            return FALLBACK_MESSAGE
        return advisor.advise(url, summary)
    except Exception as exc:
        logger.error("Advisory failed for %s: %s", url, exc)
        return FALLBACK_MESSAGE


__all__ = ["ADVISORS", "FALLBACK_MESSAGE", "BaseAdvisor", "GeminiAdvisor", "build_advisor", "get_advisory"]
