"""FastAPI dependency injection factories.

Services are process-wide singletons: the registry keeps its in-memory
state across requests. Tests swap them via ``app.dependency_overrides``.
"""

from fastapi import Depends

from src.config.settings import Settings, get_settings
from src.registry.service import RegistryService
from src.scoring.config import ScoringConfig
from src.scoring.integrity import IntegrityScorer
from src.scoring.service import ScoringService
from src.simulation.latency import LatencyStrategy, build_latency

_scoring_config = ScoringConfig()
_registry = RegistryService(scorer=IntegrityScorer(config=_scoring_config))


# ---------------------------------------------------------------------------
# Latency
# ---------------------------------------------------------------------------


def get_latency(settings: Settings = Depends(get_settings)) -> LatencyStrategy:
    return build_latency(settings)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def get_scoring_service(
    latency: LatencyStrategy = Depends(get_latency),
) -> ScoringService:
    return ScoringService(config=_scoring_config, latency=latency)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def get_registry_service() -> RegistryService:
    return _registry
