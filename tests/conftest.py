"""Shared pytest fixtures for the BCX test suite.

Provides:
- anyio_backend: run async tests on asyncio only
- registry: a fresh fixture-backed RegistryService per test
- client: AsyncClient with the registry dependency overridden, so registry
  mutations made in one test never leak into another
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from src.registry.service import RegistryService

FIXED_NOW = datetime(2024, 11, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def registry() -> RegistryService:
    """Registry with a frozen clock for predictable ids and timestamps."""
    return RegistryService(clock=lambda: FIXED_NOW)


@pytest.fixture
async def client(registry: RegistryService):
    """AsyncClient against the app, backed by the per-test registry."""
    from src.api.dependencies import get_registry_service
    from src.api.main import app

    app.dependency_overrides[get_registry_service] = lambda: registry

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
