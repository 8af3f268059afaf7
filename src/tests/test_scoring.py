import pytest

from linkguard.models import Check, CheckStatus, RiskLevel
from linkguard.scoring import calculate_score, classify, summarize_checks


def make_check(check_id="tld", status=CheckStatus.WARNING, impact=25, name="Domain Reputation"):
    return Check(id=check_id, name=name, status=status, message="msg", impact=impact)


@pytest.mark.parametrize(
    "score, level",
    [
        (100, RiskLevel.LOW),
        (85, RiskLevel.LOW),
        (84, RiskLevel.MEDIUM),
        (50, RiskLevel.MEDIUM),
        (49, RiskLevel.HIGH),
        (0, RiskLevel.HIGH),
    ],
)
def test_risk_bands_include_their_lower_bound(score, level):
    assert classify(score) == level


def test_score_starts_at_100():
    assert calculate_score([]) == 100


def test_score_subtracts_impacts():
    checks = [make_check(impact=25), make_check(check_id="chars", impact=10)]

    assert calculate_score(checks) == 65


def test_score_never_goes_negative():
    checks = [make_check(impact=40), make_check(impact=30), make_check(impact=30), make_check(impact=25)]

    assert calculate_score(checks) == 0


def test_summary_lists_name_and_status():
    checks = [
        make_check("protocol", CheckStatus.PASSED, 0, "Transport Layer Security"),
        make_check(),
    ]

    assert summarize_checks(checks) == "Transport Layer Security: passed, Domain Reputation: warning"


def test_passed_check_cannot_carry_impact():
    with pytest.raises(ValueError):
        make_check(status=CheckStatus.PASSED, impact=5)


def test_triggered_check_needs_positive_impact():
    with pytest.raises(ValueError):
        make_check(status=CheckStatus.DANGER, impact=0)


def test_negative_impact_is_rejected():
    with pytest.raises(ValueError):
        make_check(status=CheckStatus.PASSED, impact=-1)
