"""Pre-submission project validator.

Checks a partially-specified project for completeness and credibility and
produces a pass/fail verdict. Every rule is evaluated; issues and
suggestions keep rule order.

Deterministic -- no LLM calls.
"""

from __future__ import annotations

from src.models.common import ProjectSector
from src.scoring.config import ScoringConfig
from src.scoring.models import ProjectAttributes, ValidationVerdict

MISSING_METHODOLOGY = "Methodology not specified."
LOW_CO2_REDUCTION = "CO₂ reduction estimate appears too low for the project scale."
MAP_SDG_GOALS = "Map project to relevant UN SDG goals to improve market appeal."
OLD_VINTAGE = "Vintage year is older than 5 years — may face market discount."
BLUE_CARBON_CERTIFICATION = (
    "Blue carbon projects have premium pricing. "
    "Consider Verra VCS + CCBS dual certification."
)


class ProjectValidator:
    """Rule-based completeness check for project submissions.

    Rules, in order:
    1. methodology missing              -> issue
    2. co2_reduction missing or < 1000  -> issue
    3. sdg_goals missing or empty       -> suggestion
    4. vintage given and < 2020         -> issue
    5. sector is Blue Carbon            -> suggestion
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    def validate(self, project: ProjectAttributes) -> ValidationVerdict:
        cfg = self._config
        issues: list[str] = []
        suggestions: list[str] = []

        if not project.methodology:
            issues.append(MISSING_METHODOLOGY)
        if (
            not project.co2_reduction
            or project.co2_reduction < cfg.validation_min_co2_reduction
        ):
            issues.append(LOW_CO2_REDUCTION)
        if not project.sdg_goals:
            suggestions.append(MAP_SDG_GOALS)
        # A zero/absent vintage is "not given", not "old".
        if project.vintage and project.vintage < cfg.validation_min_vintage:
            issues.append(OLD_VINTAGE)
        if project.sector == ProjectSector.BLUE_CARBON:
            suggestions.append(BLUE_CARBON_CERTIFICATION)

        return ValidationVerdict(
            is_valid=not issues,
            issues=issues,
            suggestions=suggestions,
            estimated_score=self.estimate_score(len(issues), len(suggestions)),
        )

    def estimate_score(self, issue_count: int, suggestion_count: int) -> int:
        """100 minus 15 per issue, minus 5 once suggestions exceed 2; floor 40."""
        cfg = self._config
        penalty = issue_count * cfg.validation_issue_penalty
        if suggestion_count > cfg.validation_suggestion_allowance:
            penalty += cfg.validation_suggestion_penalty
        return max(cfg.validation_score_floor, 100 - penalty)
