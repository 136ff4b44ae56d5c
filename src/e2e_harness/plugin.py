"""pytest plugin wiring the harness into pytest-bdd scenarios.

Load it (and the step modules) from a conftest::

    pytest_plugins = [
        "e2e_harness.plugin",
        "e2e_harness.steps.api_steps",
        "e2e_harness.steps.web_steps",
    ]

Scenarios tagged ``@api`` or ``@web`` reach the public internet and are
skipped unless ``--run-e2e`` is given.
"""

from typing import Any, Iterator

import pytest
from playwright.sync_api import Playwright, sync_playwright

from e2e_harness.api.client import JsonPlaceholderClient, open_api_client
from e2e_harness.core.browser import BrowserSession, open_session
from e2e_harness.core.config import HarnessSettings, load_settings
from e2e_harness.core.dialogs import DialogWatcher
from e2e_harness.core.evidence import EvidenceSink
from e2e_harness.core.logging import ErrorIds, logError, logEvent
from e2e_harness.core.waits import Waiter
from e2e_harness.steps.context import ScenarioContext

E2E_MARKERS = ("api", "web")

SESSION_KEY = pytest.StashKey[BrowserSession]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("e2e-harness")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run scenarios tagged @api/@web against the live services",
    )
    group.addoption("--env", default=None, help="Environment name (default: $E2E_ENV or dev)")
    group.addoption("--config-dir", default=None, help="Directory holding <env>.yaml (default: ./config)")
    group.addoption("--headed", action="store_true", default=False, help="Show the browser window")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "api: scenario drives the JSONPlaceholder REST API")
    config.addinivalue_line("markers", "web: scenario drives the Demoblaze storefront in a browser")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-e2e"):
        return
    skip = pytest.mark.skip(reason="live scenario; pass --run-e2e to run")
    for item in items:
        if any(item.get_closest_marker(name) is not None for name in E2E_MARKERS):
            item.add_marker(skip)


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(scope="session")
def harness_settings(pytestconfig: pytest.Config) -> HarnessSettings:
    settings = load_settings(
        env=pytestconfig.getoption("--env"),
        config_dir=pytestconfig.getoption("--config-dir"),
    )
    if pytestconfig.getoption("--headed"):
        browser = settings.browser.model_copy(update={"headless": False})
        settings = settings.model_copy(update={"browser": browser})
    return settings


@pytest.fixture(scope="session")
def evidence_sink(harness_settings: HarnessSettings) -> EvidenceSink:
    sink = EvidenceSink(harness_settings.evidence.directory)
    sink.cleanup(harness_settings.evidence.keep_days)
    return sink


@pytest.fixture
def playwright_runtime() -> Iterator[Playwright]:
    """One Playwright driver per scenario, shared by browser and API client."""
    with sync_playwright() as playwright:
        yield playwright


@pytest.fixture
def browser_session(
    request: pytest.FixtureRequest,
    playwright_runtime: Playwright,
    harness_settings: HarnessSettings,
) -> Iterator[BrowserSession]:
    with open_session(playwright_runtime, harness_settings) as session:
        request.node.stash[SESSION_KEY] = session
        yield session


@pytest.fixture
def waiter(browser_session: BrowserSession, harness_settings: HarnessSettings) -> Waiter:
    return Waiter(browser_session, harness_settings.timeouts)


@pytest.fixture
def dialogs(browser_session: BrowserSession) -> Iterator[DialogWatcher]:
    watcher = DialogWatcher(browser_session.page)
    yield watcher
    if browser_session.is_open:
        watcher.detach()


@pytest.fixture
def api_client(
    playwright_runtime: Playwright,
    harness_settings: HarnessSettings,
) -> Iterator[JsonPlaceholderClient]:
    with open_api_client(playwright_runtime, harness_settings) as client:
        yield client


@pytest.fixture
def scenario_context() -> ScenarioContext:
    return ScenarioContext()


# ----------------------------------------------------------------------
# pytest-bdd hooks
# ----------------------------------------------------------------------


def pytest_bdd_before_scenario(request: pytest.FixtureRequest, feature: Any, scenario: Any) -> None:
    logEvent("scenario_started", {"feature": feature.name, "scenario": scenario.name})


def pytest_bdd_after_scenario(request: pytest.FixtureRequest, feature: Any, scenario: Any) -> None:
    logEvent("scenario_finished", {"feature": feature.name, "scenario": scenario.name})


def pytest_bdd_step_error(
    request: pytest.FixtureRequest,
    feature: Any,
    scenario: Any,
    step: Any,
    step_func: Any,
    step_func_args: dict[str, Any],
    exception: Exception,
) -> None:
    logError(
        ErrorIds.STEP_FAILED,
        f"Step failed: {step.keyword} {step.name}",
        extra={"scenario": scenario.name, "error": f"{type(exception).__name__}: {exception}"},
    )

    session = request.node.stash.get(SESSION_KEY, None)
    if session is None or not session.is_open:
        return
    settings: HarnessSettings = request.getfixturevalue("harness_settings")
    if not settings.evidence.screenshot_on_failure:
        return
    sink: EvidenceSink = request.getfixturevalue("evidence_sink")
    sink.capture_failure(session, f"{scenario.name}_{step.name}")
