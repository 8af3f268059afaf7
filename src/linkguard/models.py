"""Data models for LinkGuard scan results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class CheckStatus(Enum):
    """Outcome of a single heuristic check."""

    PASSED = "passed"
    WARNING = "warning"
    DANGER = "danger"


class RiskLevel(Enum):
    """Risk band derived from the overall score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Lower bounds (inclusive) of the low and medium risk bands.
LOW_RISK_MIN = 85
MEDIUM_RISK_MIN = 50


def classify(score: int) -> RiskLevel:
    """Map a score onto its risk band."""
    if score >= LOW_RISK_MIN:
        return RiskLevel.LOW
    if score >= MEDIUM_RISK_MIN:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


@dataclass(frozen=True)
class Check:
    """A single evaluated rule for one URL."""

    id: str
    name: str
    status: CheckStatus
    message: str
    impact: int  # points subtracted from the starting score of 100

    def __post_init__(self) -> None:
        if self.impact < 0:
            raise ValueError(f"impact must be non-negative, got {self.impact}")
        if (self.status == CheckStatus.PASSED) != (self.impact == 0):
            raise ValueError(
                f"check {self.id!r}: impact {self.impact} inconsistent with status {self.status.value}"
            )


@dataclass(frozen=True)
class AnalysisResult:
    """Final outcome of one scan."""

    id: str
    url: str
    score: int
    checks: tuple[Check, ...]
    timestamp: int  # epoch milliseconds
    advisory: str | None = None

    @property
    def risk_level(self) -> RiskLevel:
        return classify(self.score)

    def with_advisory(self, text: str) -> AnalysisResult:
        """Return a copy of this result carrying the advisory text."""
        return replace(self, advisory=text)

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-safe dict.

        Returns:
            Dict with enum values converted to strings and checks as a list.
        """
        d = asdict(self)
        d["checks"] = [
            {**asdict(check), "status": check.status.value} for check in self.checks
        ]
        d["risk_level"] = self.risk_level.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        """Rebuild a result from the output of ``to_dict``.

        Args:
            data: A dict as produced by ``to_dict`` (or read back from JSON).

        Returns:
            The reconstructed AnalysisResult.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a check status or impact is invalid.
        """
        checks = tuple(
            Check(
                id=c["id"],
                name=c["name"],
                status=CheckStatus(c["status"]),
                message=c["message"],
                impact=int(c["impact"]),
            )
            for c in data["checks"]
        )
        return cls(
            id=data["id"],
            url=data["url"],
            score=int(data["score"]),
            checks=checks,
            timestamp=int(data["timestamp"]),
            advisory=data.get("advisory"),
        )
