"""Score aggregation and risk classification for LinkGuard.

Every scan starts at 100. Each triggered check subtracts its impact and the
total is floored at 0. The resulting score maps onto three risk bands, each
inclusive of its lower bound:

    score >= 85        -> low
    50 <= score < 85   -> medium
    score < 50         -> high
"""

from __future__ import annotations

from typing import Iterable

from linkguard.models import LOW_RISK_MIN, MEDIUM_RISK_MIN, Check, classify

STARTING_SCORE = 100

__all__ = [
    "LOW_RISK_MIN",
    "MEDIUM_RISK_MIN",
    "STARTING_SCORE",
    "calculate_score",
    "classify",
    "summarize_checks",
]


def calculate_score(checks: Iterable[Check]) -> int:
    """Subtract every check's impact from the starting score.

    Args:
        checks: The checks emitted for one URL.

    Returns:
        Score in the range 0-100.
    """
    return max(0, STARTING_SCORE - sum(check.impact for check in checks))


def summarize_checks(checks: Iterable[Check]) -> str:
    """Render checks as ``name: status`` pairs for the advisory prompt.

    Args:
        checks: The checks emitted for one URL.

    Returns:
        Comma-separated summary, e.g.
        ``"Transport Layer Security: passed, Domain Reputation: warning"``.
    """
    return ", ".join(f"{check.name}: {check.status.value}" for check in checks)
