"""FastAPI scoring assistant endpoints.

POST /v1/ai/validate         — pre-submission completeness check
POST /v1/ai/integrity-score  — integrity score, risk tier, narrative
POST /v1/ai/price            — suggested price and range
POST /v1/ai/appraise         — integrity score followed by price advice

Form values arrive as strings. Integrity inputs are coerced the way the
assistant form always has (leading integer, else a default); validation
inputs that do not parse are treated as absent so the validator can
report them. Deterministic — no LLM calls.
"""

import math
import re

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from src.api.dependencies import get_scoring_service
from src.scoring.models import (
    Appraisal,
    IntegrityResult,
    IntegrityScoreInput,
    PriceAdvice,
    PriceAdviceInput,
    ProjectAttributes,
    ValidationVerdict,
)
from src.scoring.service import ScoringService

router = APIRouter(prefix="/v1/ai", tags=["scoring"])

DEFAULT_CO2_REDUCTION = 50_000
DEFAULT_VINTAGE = 2024

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_leading_int(value: object) -> int | None:
    """Parse a form value to an int: '180000 t' -> 180000, 'abc' -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ValidateRequest(BaseModel):
    sector: str | None = None
    methodology: str | None = None
    co2_reduction: int | None = None
    vintage: int | None = None
    location: str | None = None
    sdg_goals: list[int] | None = None

    @field_validator("co2_reduction", "vintage", mode="before")
    @classmethod
    def _parse_optional(cls, value: object) -> int | None:
        return parse_leading_int(value)


class IntegrityRequest(BaseModel):
    project_id: str = "demo-001"
    methodology: str
    co2_reduction: int = DEFAULT_CO2_REDUCTION
    vintage: int = DEFAULT_VINTAGE
    location: str
    sector: str

    @field_validator("co2_reduction", mode="before")
    @classmethod
    def _parse_co2(cls, value: object) -> int:
        return parse_leading_int(value) or DEFAULT_CO2_REDUCTION

    @field_validator("vintage", mode="before")
    @classmethod
    def _parse_vintage(cls, value: object) -> int:
        return parse_leading_int(value) or DEFAULT_VINTAGE

    def to_input(self) -> IntegrityScoreInput:
        return IntegrityScoreInput(**self.model_dump(exclude={"sdg_goals"}))


class AppraiseRequest(IntegrityRequest):
    sdg_goals: list[int] = Field(default_factory=list)


class PriceRequest(BaseModel):
    sector: str
    integrity_score: int = Field(ge=0, le=100)
    vintage: int
    sdg_goals: list[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/validate", response_model=ValidationVerdict)
async def validate_project(
    body: ValidateRequest,
    svc: ScoringService = Depends(get_scoring_service),
) -> ValidationVerdict:
    """Check a draft project for missing or implausible attributes."""
    return await svc.validate_project(ProjectAttributes(**body.model_dump()))


@router.post("/integrity-score", response_model=IntegrityResult)
async def integrity_score(
    body: IntegrityRequest,
    svc: ScoringService = Depends(get_scoring_service),
) -> IntegrityResult:
    return await svc.integrity_score(body.to_input())


@router.post("/price", response_model=PriceAdvice)
async def suggest_price(
    body: PriceRequest,
    svc: ScoringService = Depends(get_scoring_service),
) -> PriceAdvice:
    return await svc.suggest_price(PriceAdviceInput(**body.model_dump()))


@router.post("/appraise", response_model=Appraisal)
async def appraise(
    body: AppraiseRequest,
    svc: ScoringService = Depends(get_scoring_service),
) -> Appraisal:
    """Score integrity, then price credits at the computed score."""
    return await svc.appraise(body.to_input(), sdg_goals=body.sdg_goals)
