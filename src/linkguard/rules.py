"""Heuristic rule battery for URL risk scoring.

Each rule inspects the normalized URL on its own and yields at most one
Check. Rules never see each other's output. The protocol rule always
reports (passed or danger); every other rule reports only when triggered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from linkguard.config import RuleTables
from linkguard.models import Check, CheckStatus
from linkguard.normalizer import NormalizedURL

RuleFn = Callable[[NormalizedURL, RuleTables], Check | None]


@dataclass(frozen=True)
class Rule:
    """Descriptor for one heuristic rule."""

    id: str
    name: str
    max_impact: int
    evaluate: RuleFn

    def __call__(self, url: NormalizedURL, tables: RuleTables) -> Check | None:
        return self.evaluate(url, tables)


def _check_protocol(url: NormalizedURL, tables: RuleTables) -> Check:
    """Report whether the connection is encrypted.

    Args:
        url: The normalized URL.
        tables: Rule tables (unused).

    Returns:
        A danger Check for non-HTTPS schemes, a passed Check otherwise.
    """
    if url.scheme != "https":
        return Check(
            id="protocol",
            name="Transport Layer Security",
            status=CheckStatus.DANGER,
            message="Connection is unencrypted (HTTP). Sensitive data can be intercepted.",
            impact=30,
        )
    return Check(
        id="protocol",
        name="Transport Layer Security",
        status=CheckStatus.PASSED,
        message="Verified HTTPS encryption is active.",
        impact=0,
    )


def _check_tld(url: NormalizedURL, tables: RuleTables) -> Check | None:
    """Flag hostnames ending in a high-risk TLD suffix.

    The first matching suffix in table order is reported.
    """
    found = next((tld for tld in tables.high_risk_tlds if url.hostname.endswith(tld)), None)
    if found is None:
        return None
    return Check(
        id="tld",
        name="Domain Reputation",
        status=CheckStatus.WARNING,
        message=f"Uses '{found}', a TLD with high historical correlation to phishing campaigns.",
        impact=25,
    )


def _check_punycode(url: NormalizedURL, tables: RuleTables) -> Check | None:
    """Flag hostnames carrying the IDNA ``xn--`` prefix (homograph risk)."""
    if not url.hostname.startswith("xn--"):
        return None
    return Check(
        id="punycode",
        name="Homograph Attack",
        status=CheckStatus.DANGER,
        message=(
            "Punycode detected. This domain uses international characters "
            "to look like a different site."
        ),
        impact=40,
    )


def _check_obfuscation_chars(url: NormalizedURL, tables: RuleTables) -> Check | None:
    """Flag obfuscation characters anywhere in the href.

    Impact scales with the number of distinct characters found, not with
    how often they occur.

    Args:
        url: The normalized URL.
        tables: Rule tables with the obfuscation character set.

    Returns:
        A warning Check for one or two distinct characters, a danger Check
        for three or more, or None when the href is clean.
    """
    found = [char for char in tables.obfuscation_chars if char in url.href]
    if not found:
        return None
    return Check(
        id="chars",
        name="Obfuscation Check",
        status=CheckStatus.DANGER if len(found) > 2 else CheckStatus.WARNING,
        message=f"Found characters ({','.join(found)}) often used to hide the actual destination.",
        impact=min(30, len(found) * 10),
    )


def _check_shortener(url: NormalizedURL, tables: RuleTables) -> Check | None:
    """Flag known URL shortener services (substring match on the hostname)."""
    if not any(shortener in url.hostname for shortener in tables.shorteners):
        return None
    return Check(
        id="shortener",
        name="Destination Obfuscation",
        status=CheckStatus.WARNING,
        message="URL shortener used. The true target server is intentionally hidden.",
        impact=15,
    )


def _check_subdomains(url: NormalizedURL, tables: RuleTables) -> Check | None:
    """Flag hostnames with more than three dot-separated labels."""
    labels = url.hostname.split(".")
    if len(labels) <= 3:
        return None
    return Check(
        id="subdomains",
        name="Impersonation Vector",
        status=CheckStatus.WARNING,
        message="Deep subdomain layering (e.g., brand.com.secure-login.net) detected.",
        impact=20,
    )


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule("protocol", "Transport Layer Security", 30, _check_protocol),
    Rule("tld", "Domain Reputation", 25, _check_tld),
    Rule("punycode", "Homograph Attack", 40, _check_punycode),
    Rule("chars", "Obfuscation Check", 30, _check_obfuscation_chars),
    Rule("shortener", "Destination Obfuscation", 15, _check_shortener),
    Rule("subdomains", "Impersonation Vector", 20, _check_subdomains),
)
