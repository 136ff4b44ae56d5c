"""Page state snapshot polled by readiness and title waits."""

from pydantic import BaseModel, ConfigDict


class PageState(BaseModel):
    """The browser's current title, URL and ``document.readyState``.

    Attributes:
        url: The current page URL.
        title: The page title.
        ready_state: One of "loading", "interactive", "complete".
    """

    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    ready_state: str = "loading"

    @property
    def is_loaded(self) -> bool:
        """True once the document reports "complete"."""
        return self.ready_state == "complete"

    def summary(self) -> str:
        return f"title={self.title!r}, url={self.url!r}, readyState={self.ready_state!r}"
