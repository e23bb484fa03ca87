"""Integrity scorer — sector base, vintage bonus, scale risk.

Computes a 0-100 integrity score and risk tier for a project, with four
findings and three recommendations rendered from fixed templates.

Deterministic -- no LLM calls. ``validated_at`` is the only
time-dependent field.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from src.models.common import RiskLevel, utc_now
from src.scoring.config import ScoringConfig
from src.scoring.models import IntegrityResult, IntegrityScoreInput
from src.scoring.narrative import build_findings, build_recommendations


class IntegrityScorer:
    """Scores project integrity from sector, vintage and scale.

    finalScore = clamp(sector_base + vintage_bonus + scale_risk, 0, 100)

    * sector_base   -- per-sector table, 75 for unknown sectors
    * vintage_bonus -- +3 when vintage >= 2023
    * scale_risk    -- -5 when co2_reduction > 200,000 tCO2e
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config or ScoringConfig()
        self._clock = clock

    def base_score(self, sector: str) -> int:
        return self._config.integrity_sector_scores.get(
            sector, self._config.integrity_default_score
        )

    def compute_score(self, sector: str, vintage: int, co2_reduction: int) -> int:
        """Return the clamped integrity score without narrative."""
        cfg = self._config
        vintage_bonus = (
            cfg.integrity_vintage_bonus
            if vintage >= cfg.integrity_vintage_bonus_year
            else 0
        )
        # Very large projects get extra scrutiny.
        scale_risk = (
            -cfg.integrity_scale_penalty
            if co2_reduction > cfg.integrity_scale_threshold
            else 0
        )
        raw = self.base_score(sector) + vintage_bonus + scale_risk
        return min(100, max(0, raw))

    def risk_level(self, score: int) -> RiskLevel:
        if score >= self._config.risk_low_threshold:
            return RiskLevel.LOW
        if score >= self._config.risk_medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    def score(self, data: IntegrityScoreInput) -> IntegrityResult:
        final_score = self.compute_score(
            data.sector, data.vintage, data.co2_reduction
        )
        risk = self.risk_level(final_score)

        return IntegrityResult(
            project_id=data.project_id,
            integrity_score=final_score,
            risk_level=risk,
            findings=build_findings(
                data.methodology, data.location, data.co2_reduction, risk
            ),
            recommendations=build_recommendations(
                final_score, self._config.approval_threshold
            ),
            validated_at=self._clock(),
            model=self._config.model_label,
        )
