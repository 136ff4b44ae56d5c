"""Locator descriptors for page elements.

A Target describes *how* to find an element without touching the browser.
Page objects declare Targets as class constants; the browser session resolves
them into Playwright locators at the point of use.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

Strategy = Literal["css", "id", "xpath", "text", "link_text", "role"]


class Target(BaseModel):
    """A lazily resolved element descriptor.

    Attributes:
        strategy: How ``value`` is interpreted.
        value: Selector, id, text or ARIA role depending on ``strategy``.
        name: Accessible name, only used by the "role" strategy.
        nth: Index among matches used when a single element is required.
        parent: Optional scope; the target is looked up inside the parent.
        description: Human-readable label used in wait and log messages.
    """

    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    value: str
    name: str | None = None
    nth: int = 0
    parent: "Target | None" = None
    description: str = ""

    @field_validator("value")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def label(self) -> str:
        """Description if given, otherwise ``strategy=value``."""
        if self.description:
            return self.description
        label = f"{self.strategy}={self.value!r}"
        if self.name:
            label += f" name={self.name!r}"
        if self.parent is not None:
            label = f"{self.parent.label} >> {label}"
        return label

    def within(self, parent: "Target") -> "Target":
        """Return a copy of this target scoped to ``parent``."""
        return self.model_copy(update={"parent": parent})

    def at(self, index: int) -> "Target":
        """Return a copy of this target pointing at the ``index``-th match."""
        return self.model_copy(update={"nth": index})


Target.model_rebuild()


def by_css(selector: str, description: str = "") -> Target:
    return Target(strategy="css", value=selector, description=description)


def by_id(element_id: str, description: str = "") -> Target:
    return Target(strategy="id", value=element_id, description=description)


def by_xpath(expression: str, description: str = "") -> Target:
    return Target(strategy="xpath", value=expression, description=description)


def by_text(text: str, description: str = "") -> Target:
    """Exact visible text match."""
    return Target(strategy="text", value=text, description=description)


def by_link_text(text: str, description: str = "") -> Target:
    """Link whose text contains ``text``."""
    return Target(strategy="link_text", value=text, description=description)


def by_role(role: str, name: str | None = None, description: str = "") -> Target:
    return Target(strategy="role", value=role, name=name, description=description)
