"""Tests for the deprecated boolean wait functions."""

import time

import pytest

from e2e_harness.core.config import ConfigurationError, TimeoutSettings
from e2e_harness.core.waits import (
    TimeoutFailure,
    Waiter,
    wait_for_clickable,
    wait_for_condition,
    wait_for_storefront_home,
    wait_for_visible,
)
from e2e_harness.models.target import by_id

SHORT = 0.05


@pytest.fixture
def sleeping_session(fake_session):
    fake_session.pause.side_effect = time.sleep
    return fake_session


def _waiter(session) -> Waiter:
    return Waiter(session, TimeoutSettings(default_seconds=SHORT, quick_seconds=SHORT, extended_seconds=30))


@pytest.mark.parametrize(
    ("predicate", "expected"),
    [
        (lambda: True, True),
        (lambda: False, False),
    ],
    ids=["succeeds", "times-out"],
)
def test_condition_agrees_with_core(sleeping_session, predicate, expected: bool) -> None:
    try:
        _waiter(sleeping_session).wait_until_condition(predicate, "legacy check")
        core_succeeded = True
    except TimeoutFailure:
        core_succeeded = False

    with pytest.deprecated_call():
        legacy_result = wait_for_condition(sleeping_session, predicate, SHORT)

    assert core_succeeded is expected
    assert legacy_result is expected


def test_visible_true(sleeping_session, make_locator) -> None:
    sleeping_session.locate.return_value = make_locator(visible=True)
    with pytest.deprecated_call():
        assert wait_for_visible(sleeping_session, by_id("x"), SHORT) is True


def test_visible_false_on_timeout(sleeping_session, make_locator) -> None:
    sleeping_session.locate.return_value = make_locator(visible=False)
    with pytest.deprecated_call():
        assert wait_for_visible(sleeping_session, by_id("x"), SHORT) is False


def test_clickable_false_when_disabled(sleeping_session, make_locator) -> None:
    sleeping_session.locate.return_value = make_locator(visible=True, enabled=False)
    with pytest.deprecated_call():
        assert wait_for_clickable(sleeping_session, by_id("x"), SHORT) is False


def test_storefront_home(sleeping_session, make_locator) -> None:
    sleeping_session.locate_all.return_value = make_locator(count=9)
    with pytest.deprecated_call():
        assert wait_for_storefront_home(sleeping_session) is True


def test_unexpected_errors_are_not_converted(sleeping_session) -> None:
    def broken() -> bool:
        raise KeyError("bug")

    with pytest.deprecated_call(), pytest.raises(KeyError):
        wait_for_condition(sleeping_session, broken, SHORT)


def test_invalid_timeout_still_raises(sleeping_session) -> None:
    with pytest.deprecated_call(), pytest.raises(ConfigurationError):
        wait_for_condition(sleeping_session, lambda: True, 0)


def test_uses_session_poll_interval(sleeping_session) -> None:
    fast = sleeping_session.settings.timeouts.model_copy(update={"poll_interval_seconds": 0.01})
    sleeping_session.settings = sleeping_session.settings.model_copy(update={"timeouts": fast})
    with pytest.deprecated_call():
        assert wait_for_condition(sleeping_session, lambda: False, SHORT) is False
    first_sleep = sleeping_session.pause.call_args_list[0].args[0]
    assert first_sleep == pytest.approx(0.01)
