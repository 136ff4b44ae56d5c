"""REST API client for the JSONPlaceholder service."""

from e2e_harness.api.client import ApiRequestError, JsonPlaceholderClient, open_api_client

__all__ = ["ApiRequestError", "JsonPlaceholderClient", "open_api_client"]
