"""JSONPlaceholder REST client.

A thin wrapper over Playwright's ``APIRequestContext``: one method per
resource/verb pair, each returning an :class:`ApiResponse` with the parsed
body and the elapsed time. HTTP error statuses are returned, not raised;
only transport failures raise :class:`ApiRequestError`.
"""

import json
import time
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from playwright.sync_api import APIRequestContext, APIResponse, Playwright
from playwright.sync_api import Error as PlaywrightError

from e2e_harness.core.config import HarnessSettings
from e2e_harness.core.logging import ErrorIds, logError, logForDebugging
from e2e_harness.models.api import ApiResponse, PostPayload, UserPayload

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json; charset=UTF-8",
}


class ApiRequestError(RuntimeError):
    """Raised when a request could not be sent or its response not read."""

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(f"{method} {path} failed: {cause}")


def _parse_body(response: APIResponse) -> Any:
    text = response.text()
    if not text:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return json.loads(text)
    return text


class JsonPlaceholderClient:
    """REST client for users, posts and comments."""

    def __init__(self, request_context: APIRequestContext) -> None:
        self._request = request_context

    # ------------------------------------------------------------------
    # Generic verbs
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> ApiResponse:
        """Send one request and return the recorded response.

        Raises:
            ApiRequestError: On transport failure or an unparseable JSON body.
        """
        method = method.upper()
        kwargs: dict[str, Any] = {"method": method}
        if params:
            kwargs["params"] = {key: str(value) for key, value in params.items()}
        if json_body is not None:
            kwargs["data"] = json_body

        started = time.monotonic()
        try:
            response = self._request.fetch(path, **kwargs)
            body = _parse_body(response)
        except (PlaywrightError, ValueError) as e:
            logError(ErrorIds.API_REQUEST_FAILED, f"{method} {path} failed", extra={"error": e})
            raise ApiRequestError(method, path, e) from e
        elapsed_ms = (time.monotonic() - started) * 1000

        result = ApiResponse(
            method=method,
            url=response.url,
            status=response.status,
            body=body,
            headers={name.lower(): value for name, value in response.headers.items()},
            elapsed_ms=elapsed_ms,
        )
        logForDebugging(
            f"{method} {path} -> {result.status}",
            extra={"ms": int(elapsed_ms)},
        )
        return result

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> ApiResponse:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any) -> ApiResponse:
        return self.request("POST", path, json_body=body)

    def put(self, path: str, body: Any) -> ApiResponse:
        return self.request("PUT", path, json_body=body)

    def patch(self, path: str, body: Any) -> ApiResponse:
        return self.request("PATCH", path, json_body=body)

    def delete(self, path: str) -> ApiResponse:
        return self.request("DELETE", path)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_all_users(self, page: int | None = None, limit: int | None = None) -> ApiResponse:
        """List users, optionally paginated with ``_page`` / ``_limit``."""
        params: dict[str, Any] = {}
        if page is not None:
            params["_page"] = page
        if limit is not None:
            params["_limit"] = limit
        return self.get("/users", params=params or None)

    def get_user(self, user_id: int) -> ApiResponse:
        return self.get(f"/users/{user_id}")

    def create_user(self, user: UserPayload) -> ApiResponse:
        return self.post("/users", user.to_json())

    def update_user(self, user_id: int, user: UserPayload) -> ApiResponse:
        return self.put(f"/users/{user_id}", user.to_json())

    def patch_user(self, user_id: int, fields: Mapping[str, Any]) -> ApiResponse:
        return self.patch(f"/users/{user_id}", dict(fields))

    def delete_user(self, user_id: int) -> ApiResponse:
        return self.delete(f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Posts and comments
    # ------------------------------------------------------------------

    def get_all_posts(self, user_id: int | None = None) -> ApiResponse:
        """List posts, optionally filtered by ``userId``."""
        params = {"userId": user_id} if user_id is not None else None
        return self.get("/posts", params=params)

    def get_post(self, post_id: int) -> ApiResponse:
        return self.get(f"/posts/{post_id}")

    def get_post_comments(self, post_id: int) -> ApiResponse:
        return self.get(f"/posts/{post_id}/comments")

    def create_post(self, post: PostPayload) -> ApiResponse:
        return self.post("/posts", post.to_json())

    def close(self) -> None:
        self._request.dispose()


@contextmanager
def open_api_client(playwright: Playwright, settings: HarnessSettings) -> Iterator[JsonPlaceholderClient]:
    """Create a client bound to ``settings.api_url`` and dispose it on exit."""
    context = playwright.request.new_context(
        base_url=settings.api_url,
        extra_http_headers=DEFAULT_HEADERS,
        timeout=settings.timeouts.extended_seconds * 1000,
    )
    client = JsonPlaceholderClient(context)
    try:
        yield client
    finally:
        client.close()
