"""Scoring engine input and result models.

Inputs are permissive value objects: sector is a free string so unknown
sectors fall through to the default base, and numeric fields are taken as
given (callers coerce form input before invoking the engine).

Deterministic -- no LLM calls.
"""

from __future__ import annotations

from pydantic import Field

from src.models.common import (
    BCXBase,
    RiskLevel,
    UTCTimestamp,
    utc_now,
)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ProjectAttributes(BCXBase):
    """A partially-specified project, as submitted for pre-registration checks.

    Every field is optional; the validator reports what is missing.
    """

    sector: str | None = None
    methodology: str | None = None
    co2_reduction: int | None = None
    vintage: int | None = None
    location: str | None = None
    sdg_goals: list[int] | None = None


class IntegrityScoreInput(BCXBase):
    """Attributes the integrity scorer reads."""

    project_id: str
    methodology: str
    co2_reduction: int
    vintage: int
    location: str
    sector: str


class PriceAdviceInput(BCXBase):
    """Attributes the price advisor reads."""

    sector: str
    integrity_score: int
    vintage: int
    sdg_goals: list[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ValidationVerdict(BCXBase, frozen=True):
    """Completeness/credibility verdict for a submission."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    estimated_score: int = Field(ge=40, le=100)


class IntegrityResult(BCXBase, frozen=True):
    """Integrity score, risk tier and narrative for a single project."""

    project_id: str
    integrity_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    findings: list[str] = Field(min_length=4, max_length=4)
    recommendations: list[str] = Field(min_length=3, max_length=3)
    validated_at: UTCTimestamp = Field(default_factory=utc_now)
    model: str


class PriceAdvice(BCXBase, frozen=True):
    """Suggested per-credit price (INR) with a +/-15% band."""

    suggested_price: int
    price_range: tuple[int, int]


class Appraisal(BCXBase, frozen=True):
    """Integrity result paired with the price advice derived from it."""

    integrity: IntegrityResult
    price: PriceAdvice
