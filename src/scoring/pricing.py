"""Market price advisor.

suggested = round(sector_base * score_mult + sdg_bonus + vintage_discount)

* score_mult       -- 0.8 + (integrity_score / 100) * 0.4, i.e. 0.8..1.2
* sdg_bonus        -- 15 per claimed SDG goal
* vintage_discount -- -50 for vintages before 2022

The result is not floored at zero. The advised range is the suggested
price -15% / +15%, each rounded.

Deterministic -- no LLM calls.
"""

from __future__ import annotations

from src.scoring.config import ScoringConfig
from src.scoring.models import PriceAdvice, PriceAdviceInput
from src.scoring.narrative import round_half_up


class PriceAdvisor:
    """Suggests a per-credit price from sector, integrity, vintage and SDGs."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    def suggest_price(self, data: PriceAdviceInput) -> PriceAdvice:
        cfg = self._config

        base = cfg.price_sector_base.get(data.sector, cfg.price_default_base)
        score_mult = (
            cfg.price_score_multiplier_floor
            + (data.integrity_score / 100) * cfg.price_score_multiplier_span
        )
        sdg_bonus = len(data.sdg_goals) * cfg.price_sdg_bonus
        vintage_discount = (
            -cfg.price_vintage_discount
            if data.vintage < cfg.price_discount_before_vintage
            else 0
        )

        suggested = round_half_up(base * score_mult + sdg_bonus + vintage_discount)

        return PriceAdvice(
            suggested_price=suggested,
            price_range=(
                round_half_up(suggested * cfg.price_range_low_factor),
                round_half_up(suggested * cfg.price_range_high_factor),
            ),
        )
