"""HTTP response and payload models for the JSONPlaceholder API.

ApiResponse is an immutable record of a single request/response pair,
including wall-clock timing so scenarios can assert on latency.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Result of a single API call.

    Attributes:
        method: HTTP method used.
        url: Fully resolved request URL.
        status: HTTP status code.
        body: Parsed JSON body, raw text for non-JSON responses, or None.
        headers: Response headers (lower-cased names).
        elapsed_ms: Wall-clock time from send to full body received.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    status: int
    body: Any = None
    headers: dict[str, str] = Field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status < 300

    def json_list(self) -> list[Any]:
        """Body as a list; raises TypeError if the body is not a JSON array."""
        if not isinstance(self.body, list):
            raise TypeError(f"Expected a JSON array from {self.method} {self.url}, got {type(self.body).__name__}")
        return self.body

    def json_object(self) -> dict[str, Any]:
        """Body as a dict; raises TypeError if the body is not a JSON object."""
        if not isinstance(self.body, dict):
            raise TypeError(f"Expected a JSON object from {self.method} {self.url}, got {type(self.body).__name__}")
        return self.body


class UserPayload(BaseModel):
    """User resource as accepted by POST/PUT /users."""

    model_config = ConfigDict(frozen=True)

    name: str
    username: str
    email: str | None = None
    phone: str | None = None
    website: str | None = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PostPayload(BaseModel):
    """Post resource as accepted by POST /posts."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    userId: int

    def to_json(self) -> dict[str, Any]:
        return self.model_dump()
