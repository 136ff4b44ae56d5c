"""Doubles shared by the page object tests.

Page objects only talk to BrowserSession, Waiter and DialogWatcher, so the
tests replace all three with mocks. ``wait_until_condition`` evaluates its
predicate once, which is enough to exercise the conditions pages build.
"""

from unittest.mock import MagicMock

import pytest

from e2e_harness.core.config import TimeoutSettings


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    session.page.url = "https://www.demoblaze.com/index.html"
    session.page.title.return_value = "STORE"
    return session


@pytest.fixture
def mock_waiter() -> MagicMock:
    waiter = MagicMock()
    waiter.timeouts = TimeoutSettings()
    waiter.wait_until_condition.side_effect = lambda predicate, description="", timeout=None: predicate()
    return waiter


@pytest.fixture
def mock_dialogs() -> MagicMock:
    dialogs = MagicMock()
    dialogs.poll.return_value = None
    return dialogs
