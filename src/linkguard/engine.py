"""Heuristic scoring engine for LinkGuard.

The engine is a pure function of (raw URL, rule tables): it never touches
the network or any shared mutable state, so one instance can serve
concurrent callers.
"""

from __future__ import annotations

import logging
import time
import uuid
from functools import lru_cache
from typing import Sequence

from linkguard.config import RuleTables, load_config
from linkguard.models import AnalysisResult, Check
from linkguard.normalizer import normalize_url
from linkguard.rules import DEFAULT_RULES, Rule
from linkguard.scoring import calculate_score

logger = logging.getLogger(__name__)


class HeuristicEngine:
    """Run the rule battery against a URL and aggregate the score."""

    def __init__(self, tables: RuleTables, rules: Sequence[Rule] = DEFAULT_RULES) -> None:
        """Initialize with injected rule tables.

        Args:
            tables: Lookup tables (shorteners, obfuscation chars, TLDs).
            rules: Ordered rule descriptors. Defaults to the standard six.
        """
        self.tables = tables
        self.rules = tuple(rules)

    def analyze(self, raw_url: str) -> AnalysisResult:
        """Score a single URL.

        Args:
            raw_url: The URL as supplied by the user.

        Returns:
            A fresh AnalysisResult with checks in rule order.

        Raises:
            MalformedURL: If the input cannot be parsed. No rule runs.
        """
        url = normalize_url(raw_url)

        checks: list[Check] = []
        for rule in self.rules:
            check = rule(url, self.tables)
            if check is not None:
                checks.append(check)

        score = calculate_score(checks)
        logger.debug("Scored %s: %d (%d checks)", url.href, score, len(checks))

        return AnalysisResult(
            id=str(uuid.uuid4()),
            url=url.href,
            score=score,
            checks=tuple(checks),
            timestamp=int(time.time() * 1000),
        )


@lru_cache(maxsize=1)
def _default_engine() -> HeuristicEngine:
    return HeuristicEngine(RuleTables.from_config(load_config()))


def analyze(raw_url: str, tables: RuleTables | None = None) -> AnalysisResult:
    """Score a URL with the given tables, or the default configuration's.

    Args:
        raw_url: The URL as supplied by the user.
        tables: Optional rule tables. When omitted the bundled defaults
            (plus any local override) are used.

    Returns:
        The AnalysisResult for the URL.

    Raises:
        MalformedURL: If the input cannot be parsed.
    """
    engine = _default_engine() if tables is None else HeuristicEngine(tables)
    return engine.analyze(raw_url)
