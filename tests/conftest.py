import types
import typing
from unittest.mock import AsyncMock

import pytest
from prometheus_client import CollectorRegistry

from aniroll.core.cache import ExpiringCache
from aniroll.core.metrics import MetricsService
from aniroll.core.orchestrator import CommandOrchestrator
from aniroll.interactions.context import Context


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeInteraction:
    """Records what would've been sent to Discord."""

    def __init__(
        self, command_name: str = "animestats", username: str = "tester"
    ) -> None:
        self.command_name = command_name
        self.user = types.SimpleNamespace(username=username)
        self.options: typing.List[typing.Any] = []
        self.create_initial_response = AsyncMock()
        self.edit_initial_response = AsyncMock()


class FakeRest:
    def __init__(self) -> None:
        self.fetch_user_lists = AsyncMock()
        self.fetch_cover_image = AsyncMock()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ExpiringCache:
    return ExpiringCache(300.0, clock=clock)


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> MetricsService:
    return MetricsService(registry)


@pytest.fixture
def rest() -> FakeRest:
    return FakeRest()


@pytest.fixture
def orchestrator(
    rest: FakeRest, cache: ExpiringCache, metrics: MetricsService
) -> CommandOrchestrator:
    return CommandOrchestrator(rest, cache, metrics)  # type: ignore


@pytest.fixture
def interaction() -> FakeInteraction:
    return FakeInteraction()


@pytest.fixture
def ctx(interaction: FakeInteraction) -> Context:
    return Context(interaction)  # type: ignore
