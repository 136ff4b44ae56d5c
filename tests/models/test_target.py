"""Tests for Target descriptors."""

import pytest
from pydantic import ValidationError

from e2e_harness.models.target import Target, by_css, by_id, by_link_text, by_role


class TestTarget:
    def test_label_prefers_description(self) -> None:
        assert by_id("login2", "Log in link").label == "Log in link"

    def test_label_from_strategy(self) -> None:
        assert by_css(".card-title").label == "css='.card-title'"

    def test_role_label_includes_name(self) -> None:
        assert by_role("button", "Purchase").label == "role='button' name='Purchase'"

    def test_scoped_label(self) -> None:
        target = by_link_text("Delete").within(by_id("tbodyid"))
        assert target.label == "id='tbodyid' >> link_text='Delete'"

    def test_within_and_at_return_copies(self) -> None:
        base = by_css("tr")
        scoped = base.within(by_id("tbodyid")).at(2)
        assert base.parent is None and base.nth == 0
        assert scoped.parent == by_id("tbodyid")
        assert scoped.nth == 2

    def test_empty_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            by_css("")

    def test_unknown_strategy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Target(strategy="class_name", value="card-title")  # type: ignore[arg-type]

    def test_frozen_and_hashable(self) -> None:
        target = by_id("cartur")
        with pytest.raises(ValidationError):
            target.value = "other"  # type: ignore[misc]
        assert by_id("cartur") == target
