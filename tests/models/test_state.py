"""Tests for PageState."""

from e2e_harness.models.state import PageState


def test_is_loaded_only_when_complete() -> None:
    assert PageState(url="u", title="t", ready_state="complete").is_loaded
    assert not PageState(url="u", title="t", ready_state="interactive").is_loaded
    assert not PageState(url="u", title="t").is_loaded


def test_summary() -> None:
    state = PageState(url="https://www.demoblaze.com/", title="STORE", ready_state="complete")
    assert state.summary() == "title='STORE', url='https://www.demoblaze.com/', readyState='complete'"
