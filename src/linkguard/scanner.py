"""Scan orchestrator for LinkGuard."""

from __future__ import annotations

import logging
from typing import Any

from linkguard.advisory import get_advisory
from linkguard.config import RuleTables
from linkguard.engine import HeuristicEngine
from linkguard.history import HistoryStore
from linkguard.models import AnalysisResult
from linkguard.scoring import summarize_checks

logger = logging.getLogger(__name__)


def scan_url(
    raw_url: str,
    config: dict[str, Any],
    *,
    engine: HeuristicEngine | None = None,
    with_advisory: bool = True,
    history: HistoryStore | None = None,
) -> AnalysisResult:
    """Score a URL, then optionally attach advisory text and record it.

    The heuristic score is final before the advisory call starts; a failed
    advisory only changes the text attached to the result.

    Args:
        raw_url: The URL as supplied by the user.
        config: The loaded LinkGuard configuration dictionary.
        engine: Engine to use. Built from ``config`` when omitted.
        with_advisory: If False, skip the advisory call entirely.
        history: Optional store the finished result is added to.

    Returns:
        The AnalysisResult, with ``advisory`` set when requested.

    Raises:
        MalformedURL: If the input cannot be parsed.
    """
    if engine is None:
        engine = HeuristicEngine(RuleTables.from_config(config))

    result = engine.analyze(raw_url)
    logger.info("Scanned %s: score %d (%s risk)", result.url, result.score, result.risk_level.value)

    if with_advisory:
        summary = summarize_checks(result.checks)
        result = result.with_advisory(get_advisory(result.url, summary, config))

    if history is not None:
        history.add(result)

    return result
