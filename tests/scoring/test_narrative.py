"""Tests for narrative helpers: rounding and Indian digit grouping."""

import pytest

from src.models.common import RiskLevel
from src.scoring.narrative import (
    CLEAN_FINDING,
    HIGH_RISK_FINDING,
    MRV_AUDIT_RECOMMENDATION,
    SATELLITE_BASELINE_RECOMMENDATION,
    build_findings,
    build_recommendations,
    format_indian_number,
    round_half_up,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (3.5, 4), (2.4999, 2), (-2.5, -2), (-2.6, -3), (0.0, 0)],
    )
    def test_halves_round_toward_positive(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_differs_from_builtin_round(self) -> None:
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3


class TestFormatIndianNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (50_000, "50,000"),
            (180_000, "1,80,000"),
            (1_234_567, "12,34,567"),
            (123_456_789, "12,34,56,789"),
            (-250_000, "-2,50,000"),
        ],
    )
    def test_grouping(self, value: int, expected: str) -> None:
        assert format_indian_number(value) == expected


class TestBuilders:
    def test_findings_order(self) -> None:
        findings = build_findings("AR-ACM0003", "Sikkim", 45_000, RiskLevel.LOW)
        assert findings[0].startswith("Methodology AR-ACM0003")
        assert findings[1].startswith("Location Sikkim")
        assert "45,000 tCO₂e" in findings[2]
        assert findings[3] == CLEAN_FINDING

    def test_only_high_risk_flags_verification(self) -> None:
        for level in (RiskLevel.LOW, RiskLevel.MEDIUM):
            assert build_findings("m", "l", 1, level)[3] == CLEAN_FINDING
        assert build_findings("m", "l", 1, RiskLevel.HIGH)[3] == HIGH_RISK_FINDING

    def test_first_two_recommendations_fixed(self) -> None:
        for score in (0, 79, 80, 100):
            recs = build_recommendations(score, approval_threshold=80)
            assert recs[:2] == [
                SATELLITE_BASELINE_RECOMMENDATION,
                MRV_AUDIT_RECOMMENDATION,
            ]
