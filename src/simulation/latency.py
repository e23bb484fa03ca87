"""Latency injection for demo builds.

The engine and registry answer instantly. Demo deployments that want to
show loading states wrap calls with a ``FixedLatency`` strategy; every
other build uses ``NoLatency``.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from src.config.settings import Settings

logger = logging.getLogger(__name__)


class LatencyStrategy(ABC):
    """Awaited before a simulated request/response round trip."""

    @abstractmethod
    async def wait(self, flow: str) -> None: ...


class NoLatency(LatencyStrategy):
    """Returns immediately."""

    async def wait(self, flow: str) -> None:
        return None


class FixedLatency(LatencyStrategy):
    """Sleeps a fixed number of milliseconds per named flow.

    Flows without an entry use ``default_ms``.
    """

    def __init__(self, delays_ms: dict[str, int], default_ms: int = 0) -> None:
        negative = {k: v for k, v in delays_ms.items() if v < 0}
        if negative or default_ms < 0:
            msg = f"Latency must be non-negative, got {negative or default_ms}."
            raise ValueError(msg)
        self._delays_ms = dict(delays_ms)
        self._default_ms = default_ms

    def delay_for(self, flow: str) -> int:
        return self._delays_ms.get(flow, self._default_ms)

    async def wait(self, flow: str) -> None:
        delay_ms = self.delay_for(flow)
        if delay_ms:
            logger.debug("Simulating %d ms latency for %s", delay_ms, flow)
            await asyncio.sleep(delay_ms / 1000)


def build_latency(settings: Settings) -> LatencyStrategy:
    """Pick the latency strategy for the configured build."""
    if not settings.SIMULATE_LATENCY:
        return NoLatency()
    return FixedLatency(settings.latency_ms)
