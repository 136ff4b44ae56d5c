"""E2E harness core components."""

from e2e_harness.core.browser import BrowserSession, NavigationError, SessionClosedError, open_session
from e2e_harness.core.config import ConfigurationError, HarnessSettings, TimeoutSettings, load_settings
from e2e_harness.core.dialogs import DialogWatcher
from e2e_harness.core.evidence import EvidenceSink
from e2e_harness.core.waits import (
    Poller,
    TimeoutFailure,
    TransientEvaluationError,
    Waiter,
    classify_timeout,
    is_transient,
)

__all__ = [
    "BrowserSession",
    "NavigationError",
    "SessionClosedError",
    "open_session",
    "ConfigurationError",
    "HarnessSettings",
    "TimeoutSettings",
    "load_settings",
    "DialogWatcher",
    "EvidenceSink",
    "Poller",
    "TimeoutFailure",
    "TransientEvaluationError",
    "Waiter",
    "classify_timeout",
    "is_transient",
]
