"""Per-scenario state shared between step definitions.

One ScenarioContext is created per scenario by the ``scenario_context``
fixture and discarded afterwards; nothing in it outlives the scenario.
"""

from typing import Any

from e2e_harness.models.api import ApiResponse, UserPayload


class ScenarioContext:
    """State threaded through the Given/When/Then steps of one scenario."""

    def __init__(self, max_history_length: int = 50) -> None:
        """Initialize an empty context.

        Args:
            max_history_length: Maximum number of responses and dialogs kept.
                                Default is 50.
        """
        self._max_history_length = max_history_length
        self._responses: list[ApiResponse] = []
        self._dialogs: list[str] = []
        self.user_payload: UserPayload | None = None
        self.created_id: int | None = None
        self.credentials: tuple[str, str] | None = None
        self.product: str | None = None
        self.values: dict[str, Any] = {}

    def record_response(self, response: ApiResponse) -> ApiResponse | None:
        """Record an API response, making it the current one.

        Returns:
            The previous response if one existed, None otherwise.
        """
        previous = self._responses[-1] if self._responses else None
        self._responses.append(response)
        if len(self._responses) > self._max_history_length:
            self._responses = self._responses[-self._max_history_length :]
        return previous

    @property
    def last_response(self) -> ApiResponse:
        """The most recent response.

        Raises:
            LookupError: If no request has been made in this scenario.
        """
        if not self._responses:
            raise LookupError("No API response recorded in this scenario")
        return self._responses[-1]

    def get_response_history(self) -> list[ApiResponse]:
        """All recorded responses, most recent first."""
        return list(reversed(self._responses))

    def record_dialog(self, message: str | None) -> None:
        """Record the outcome of an alert-producing action (None if no alert)."""
        if message is None:
            return
        self._dialogs.append(message)
        if len(self._dialogs) > self._max_history_length:
            self._dialogs = self._dialogs[-self._max_history_length :]

    @property
    def last_dialog(self) -> str | None:
        return self._dialogs[-1] if self._dialogs else None

    def get_dialog_history(self) -> list[str]:
        return list(self._dialogs)

    def remember_credentials(self, username: str, password: str) -> None:
        self.credentials = (username, password)

    def require_credentials(self) -> tuple[str, str]:
        if self.credentials is None:
            raise LookupError("No account was registered in this scenario")
        return self.credentials

    def summary(self) -> dict[str, Any]:
        """Compact description for logs and failure reports."""
        return {
            "responses": len(self._responses),
            "last_status": self._responses[-1].status if self._responses else None,
            "dialogs": len(self._dialogs),
            "last_dialog": self.last_dialog,
            "user": self.credentials[0] if self.credentials else None,
            "product": self.product,
        }
