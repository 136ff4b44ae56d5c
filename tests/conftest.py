"""Shared test fixtures for e2e_harness tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from e2e_harness.core.config import HarnessSettings, TimeoutSettings
from e2e_harness.core.waits import Poller, Waiter
from e2e_harness.models.state import PageState

pytest_plugins = [
    "e2e_harness.plugin",
    "e2e_harness.steps.api_steps",
    "e2e_harness.steps.web_steps",
]


class FakeClock:
    """Deterministic clock; sleeping advances time instead of blocking."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def poller(clock: FakeClock) -> Poller:
    return Poller(poll_interval=0.5, clock=clock, sleep=clock.sleep)


@pytest.fixture
def fake_session(timeouts: TimeoutSettings) -> MagicMock:
    """A BrowserSession double sitting on a loaded storefront page."""
    session = MagicMock()
    session.settings = HarnessSettings(
        environment="test",
        base_url="https://www.demoblaze.com",
        api_url="https://jsonplaceholder.typicode.com",
        timeouts=timeouts,
    )
    session.current_state.return_value = PageState(
        url="https://www.demoblaze.com/index.html",
        title="STORE",
        ready_state="complete",
    )
    session.page.title.return_value = "STORE"
    session.page.url = "https://www.demoblaze.com/index.html"
    return session


@pytest.fixture
def timeouts() -> TimeoutSettings:
    return TimeoutSettings(default_seconds=3.0, quick_seconds=1.0, extended_seconds=6.0, poll_interval_seconds=0.5)


@pytest.fixture
def waiter_under_test(fake_session: MagicMock, timeouts: TimeoutSettings, poller: Poller) -> Waiter:
    return Waiter(fake_session, timeouts, poller=poller)


@pytest.fixture
def settings(tmp_path: Path) -> HarnessSettings:
    return HarnessSettings(
        environment="test",
        base_url="https://www.demoblaze.com",
        api_url="https://jsonplaceholder.typicode.com",
        evidence={"directory": tmp_path / "evidence"},
    )


@pytest.fixture
def make_locator():
    """Factory for Playwright Locator doubles."""

    def factory(visible: bool = True, enabled: bool = True, count: int = 1) -> MagicMock:
        locator = MagicMock()
        locator.is_visible.return_value = visible
        locator.is_enabled.return_value = enabled
        locator.is_hidden.return_value = not visible
        locator.count.return_value = count
        return locator

    return factory
