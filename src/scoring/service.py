"""Scoring service — async entry points over the pure engine.

Wraps the validator, integrity scorer and price advisor with the injected
latency strategy and one log line per call. The engine components stay
synchronous and side-effect free; only this layer awaits.
"""

from __future__ import annotations

import logging

from src.scoring.config import ScoringConfig
from src.scoring.integrity import IntegrityScorer
from src.scoring.models import (
    Appraisal,
    IntegrityResult,
    IntegrityScoreInput,
    PriceAdvice,
    PriceAdviceInput,
    ProjectAttributes,
    ValidationVerdict,
)
from src.scoring.pricing import PriceAdvisor
from src.scoring.validator import ProjectValidator
from src.simulation.latency import LatencyStrategy, NoLatency

logger = logging.getLogger(__name__)


class ScoringService:
    """Request/response facade for the scoring & eligibility engine."""

    def __init__(
        self,
        config: ScoringConfig | None = None,
        latency: LatencyStrategy | None = None,
    ) -> None:
        self._config = config or ScoringConfig()
        self._latency = latency or NoLatency()
        self._validator = ProjectValidator(config=self._config)
        self._scorer = IntegrityScorer(config=self._config)
        self._advisor = PriceAdvisor(config=self._config)

    async def validate_project(self, project: ProjectAttributes) -> ValidationVerdict:
        await self._latency.wait("validate")
        verdict = self._validator.validate(project)
        logger.info(
            "Validated project: valid=%s issues=%d suggestions=%d score=%d",
            verdict.is_valid,
            len(verdict.issues),
            len(verdict.suggestions),
            verdict.estimated_score,
        )
        return verdict

    async def integrity_score(self, data: IntegrityScoreInput) -> IntegrityResult:
        await self._latency.wait("integrity")
        result = self._scorer.score(data)
        logger.info(
            "Integrity score for %s: %d (%s)",
            result.project_id,
            result.integrity_score,
            result.risk_level.value,
        )
        return result

    async def suggest_price(self, data: PriceAdviceInput) -> PriceAdvice:
        await self._latency.wait("price")
        advice = self._advisor.suggest_price(data)
        logger.info(
            "Price advice for %s: %d [%d-%d]",
            data.sector,
            advice.suggested_price,
            *advice.price_range,
        )
        return advice

    async def appraise(
        self,
        data: IntegrityScoreInput,
        sdg_goals: list[int] | None = None,
    ) -> Appraisal:
        """Score integrity, then price the credits using that score."""
        integrity = await self.integrity_score(data)
        price = await self.suggest_price(
            PriceAdviceInput(
                sector=data.sector,
                integrity_score=integrity.integrity_score,
                vintage=data.vintage,
                sdg_goals=sdg_goals or [],
            )
        )
        return Appraisal(integrity=integrity, price=price)
