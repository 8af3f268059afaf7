import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from linkguard.config import RuleTables
from linkguard.engine import HeuristicEngine, analyze
from linkguard.models import CheckStatus, RiskLevel
from linkguard.normalizer import MalformedURL
from linkguard.rules import DEFAULT_RULES


def check_ids(result):
    ids = []
    for check in result.checks:
        ids.append(check.id)
    return ids


def test_plain_http_only_loses_protocol_points(engine):
    result = engine.analyze("http://my-bank-login.com")

    assert check_ids(result) == ["protocol"]
    assert result.checks[0].status == CheckStatus.DANGER
    assert result.score == 70
    assert result.risk_level == RiskLevel.MEDIUM


def test_high_risk_tld(engine):
    result = engine.analyze("https://secure-update.tk")

    assert check_ids(result) == ["protocol", "tld"]
    assert result.checks[0].status == CheckStatus.PASSED
    assert result.score == 75


def test_userinfo_trick_on_risky_tld(engine):
    result = engine.analyze("https://paypal.com@verify-identity-823.top/login")

    assert check_ids(result) == ["protocol", "tld", "chars"]
    chars = result.checks[2]
    assert chars.status == CheckStatus.WARNING
    assert chars.impact == 10
    assert "@" in chars.message
    assert result.score == 65


def test_punycode_hostname(engine):
    result = engine.analyze("https://xn--80ak6aa92e.com")

    assert check_ids(result) == ["protocol", "punycode"]
    assert result.score == 60


def test_clean_url_scores_full_marks(engine):
    result = engine.analyze("https://www.google.com")

    assert check_ids(result) == ["protocol"]
    assert result.score == 100
    assert result.risk_level == RiskLevel.LOW


def test_bare_domain_passes_protocol_check(engine):
    result = engine.analyze("example.com")

    assert result.url == "https://example.com/"
    assert result.checks[0].status == CheckStatus.PASSED
    assert result.score == 100


def test_every_rule_firing_floors_score_at_zero(engine):
    result = engine.analyze("http://xn--abc.bit.ly.example.tk/?a=1&b=(2)")

    assert check_ids(result) == ["protocol", "tld", "punycode", "chars", "shortener", "subdomains"]
    assert sum(c.impact for c in result.checks) == 160
    assert result.score == 0
    assert result.risk_level == RiskLevel.HIGH


@pytest.mark.parametrize(
    "raw",
    [
        "https://www.google.com",
        "http://my-bank-login.com",
        "bit.ly/xyz",
        "https://a.b.c.example.top/?x=1",
        "http://xn--abc.bit.ly.example.tk/?a=1&b=(2)",
    ],
)
def test_score_matches_sum_of_impacts(engine, raw):
    result = engine.analyze(raw)

    assert 0 <= result.score <= 100
    assert result.score == max(0, 100 - sum(c.impact for c in result.checks))
    assert check_ids(result).count("protocol") == 1
    assert len(set(check_ids(result))) == len(result.checks)


@pytest.mark.parametrize("raw", ["", "not a url!! spaces"])
def test_malformed_input_aborts_scan(engine, raw):
    with pytest.raises(MalformedURL):
        engine.analyze(raw)


def test_repeated_scans_agree_except_identity(engine):
    first = engine.analyze("https://paypal.com@verify-identity-823.top/login")
    second = engine.analyze("https://paypal.com@verify-identity-823.top/login")

    assert first.id != second.id
    assert first.score == second.score
    assert first.checks == second.checks
    assert first.url == second.url


def test_result_is_immutable(engine):
    result = engine.analyze("https://www.google.com")

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.score = 0


def test_timestamp_is_epoch_milliseconds(engine):
    result = engine.analyze("https://www.google.com")

    assert result.timestamp > 1_600_000_000_000


def test_injected_tables_drive_the_rules():
    tables = RuleTables(shorteners=("example.com",), obfuscation_chars=(), high_risk_tlds=(".com",))
    engine = HeuristicEngine(tables)

    result = engine.analyze("https://www.example.com/?a=1")

    assert check_ids(result) == ["protocol", "tld", "shortener"]
    assert result.score == 60


def test_custom_rule_list():
    tables = RuleTables(shorteners=(), obfuscation_chars=(), high_risk_tlds=())
    engine = HeuristicEngine(tables, rules=DEFAULT_RULES[:1])

    result = engine.analyze("http://a.b.c.d.example.com")

    assert check_ids(result) == ["protocol"]
    assert result.score == 70


def test_module_level_analyze_uses_default_tables():
    result = analyze("https://secure-update.tk")

    assert result.score == 75


def test_concurrent_scans_are_independent(engine):
    urls = ["https://www.google.com", "http://my-bank-login.com", "https://secure-update.tk"] * 10

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(engine.analyze, urls))

    assert [r.score for r in results] == [100, 70, 75] * 10
    assert len({r.id for r in results}) == len(results)
