"""Narrative templates for integrity results.

Findings and recommendations are fixed templates; only the interpolated
attributes and two score-dependent lines vary.
"""

from __future__ import annotations

import math

from src.models.common import RiskLevel

HIGH_RISK_FINDING = (
    "⚠ Additional third-party verification recommended before credit issuance."
)
CLEAN_FINDING = "No major greenwashing indicators detected."

SATELLITE_BASELINE_RECOMMENDATION = (
    "Submit satellite imagery baseline from 2019–2021 for permanence verification."
)
MRV_AUDIT_RECOMMENDATION = (
    "Ensure 3rd-party MRV audit is completed by an accredited agency "
    "(DNV, Bureau Veritas)."
)
CO_REGISTER_RECOMMENDATION = (
    "Consider co-registering with Gold Standard to improve credit market value."
)
PROCEED_RECOMMENDATION = (
    "Project meets BCX quality threshold. Proceed to registry approval."
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Matches the rounding the exchange's price sheets have always used,
    which differs from Python's round-half-to-even: 2.5 -> 3, -2.5 -> -2.
    """
    return math.floor(value + 0.5)


def format_indian_number(value: int) -> str:
    """Group digits the Indian way: 1234567 -> '12,34,567'."""
    sign = "-" if value < 0 else ""
    digits = str(abs(int(value)))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join([*groups, tail])


def build_findings(
    methodology: str,
    location: str,
    co2_reduction: int,
    risk_level: RiskLevel,
) -> list[str]:
    """Return the four findings lines, in display order."""
    return [
        f"Methodology {methodology} is recognized under BIS/MoEFCC framework.",
        f"Location {location} has verifiable land-use change records.",
        (
            f"CO₂ reduction of {format_indian_number(co2_reduction)} tCO₂e "
            "is within plausible range for sector."
        ),
        HIGH_RISK_FINDING if risk_level == RiskLevel.HIGH else CLEAN_FINDING,
    ]


def build_recommendations(score: int, approval_threshold: int) -> list[str]:
    """Return the three recommendation lines, in display order."""
    return [
        SATELLITE_BASELINE_RECOMMENDATION,
        MRV_AUDIT_RECOMMENDATION,
        CO_REGISTER_RECOMMENDATION
        if score < approval_threshold
        else PROCEED_RECOMMENDATION,
    ]
