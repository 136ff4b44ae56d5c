"""Target resolution for Playwright pages.

This module turns :class:`~e2e_harness.models.target.Target` descriptors into
Playwright Locators. Resolution is lazy: nothing is queried until the locator
is used, so a Target can be declared long before the element exists.
"""

from typing import Any, cast

from playwright.sync_api import Locator, Page

from e2e_harness.models.target import Target


def _selector_root(page: Page, target: Target) -> Any:
    if target.parent is None:
        return page
    return resolve_all(page, target.parent).nth(target.parent.nth)


def resolve_all(page: Page, target: Target) -> Locator:
    """Resolve a target to a Locator matching every candidate element.

    Args:
        page: The Playwright Page object.
        target: The element descriptor.

    Returns:
        A Playwright Locator (possibly matching zero or many elements).
    """
    root = _selector_root(page, target)

    if target.strategy == "css":
        return root.locator(target.value)
    if target.strategy == "id":
        return root.locator(f"[id={target.value!r}]")
    if target.strategy == "xpath":
        return root.locator(f"xpath={target.value}")
    if target.strategy == "text":
        return root.get_by_text(target.value, exact=True)
    if target.strategy == "link_text":
        return root.locator("a").filter(has_text=target.value)
    if target.strategy == "role":
        if target.name:
            return root.get_by_role(cast(Any, target.value), name=target.name)
        return root.get_by_role(cast(Any, target.value))

    raise ValueError(f"Unknown target strategy {target.strategy!r}")


def resolve_target(page: Page, target: Target) -> Locator:
    """Resolve a target to a Locator for exactly one element (``target.nth``)."""
    return resolve_all(page, target).nth(target.nth)


def xpath_literal(text: str) -> str:
    """Quote ``text`` as an XPath 1.0 string literal.

    XPath has no escape sequences, so text holding both quote kinds is
    assembled with ``concat()``.
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = (f"'{part}'" for part in text.split("'"))
    return "concat(" + ", \"'\", ".join(parts) + ")"
