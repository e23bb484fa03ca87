"""Scoring engine configuration.

Holds the sector tables, thresholds and adjustments used by the validator,
integrity scorer and price advisor. Defaults reproduce the exchange's
published rules; the three vintage cut-offs are fixed calendar years, not
offsets from the current year.

Deterministic -- no LLM calls.
"""

from __future__ import annotations

from pydantic import Field

from src.models.common import BCXBase, ProjectSector


class ScoringConfig(BCXBase):
    """Configuration for the scoring & eligibility engine."""

    # --- Validator ---
    validation_min_co2_reduction: int = 1000
    validation_min_vintage: int = 2020
    validation_issue_penalty: int = 15
    validation_suggestion_allowance: int = 2
    validation_suggestion_penalty: int = 5
    validation_score_floor: int = Field(default=40, ge=40, le=100)

    # --- Integrity scorer ---
    integrity_sector_scores: dict[str, int] = Field(
        default_factory=lambda: {
            ProjectSector.BLUE_CARBON: 95,
            ProjectSector.AFFORESTATION: 88,
            ProjectSector.RENEWABLE_ENERGY: 90,
            ProjectSector.METHANE_CAPTURE: 80,
            ProjectSector.ENERGY_EFFICIENCY: 85,
            ProjectSector.SOIL_CARBON: 78,
            ProjectSector.WASTE_MANAGEMENT: 72,
        },
    )
    integrity_default_score: int = 75
    integrity_vintage_bonus_year: int = 2023
    integrity_vintage_bonus: int = 3
    integrity_scale_threshold: int = 200_000
    integrity_scale_penalty: int = 5
    risk_low_threshold: int = 85
    risk_medium_threshold: int = 70
    approval_threshold: int = 80
    model_label: str = "bcx-integrity-v1-mock (Genkit/VertexAI ready)"

    # --- Price advisor ---
    price_sector_base: dict[str, int] = Field(
        default_factory=lambda: {
            ProjectSector.BLUE_CARBON: 1150,
            ProjectSector.AFFORESTATION: 680,
            ProjectSector.RENEWABLE_ENERGY: 820,
            ProjectSector.METHANE_CAPTURE: 900,
            ProjectSector.ENERGY_EFFICIENCY: 720,
            ProjectSector.SOIL_CARBON: 640,
            ProjectSector.WASTE_MANAGEMENT: 680,
        },
    )
    price_default_base: int = 750
    price_score_multiplier_floor: float = 0.8
    price_score_multiplier_span: float = 0.4
    price_sdg_bonus: int = 15
    price_discount_before_vintage: int = 2022
    price_vintage_discount: int = 50
    price_range_low_factor: float = 0.85
    price_range_high_factor: float = 1.15
