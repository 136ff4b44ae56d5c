"""Tests for the API step definitions, called as plain functions."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from e2e_harness.models.api import ApiResponse, UserPayload
from e2e_harness.steps import api_steps
from e2e_harness.steps.context import ScenarioContext

USER_TABLE = [["name", "username", "email"], ["Jane Doe", "jdoe", "jane@example.com"]]


def make_response(status: int = 200, body: Any = None, **kwargs: Any) -> ApiResponse:
    return ApiResponse(method="GET", url="https://jsonplaceholder.typicode.com/users", status=status, body=body, **kwargs)


@pytest.fixture
def context() -> ScenarioContext:
    return ScenarioContext()


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


class TestTables:
    def test_table_to_records(self) -> None:
        assert api_steps.table_to_records(USER_TABLE) == [
            {"name": "Jane Doe", "username": "jdoe", "email": "jane@example.com"}
        ]

    def test_header_only(self) -> None:
        with pytest.raises(ValueError, match="header row"):
            api_steps.table_to_records([["name"]])

    def test_given_user_payload(self, context: ScenarioContext) -> None:
        api_steps.given_user_payload(context, USER_TABLE)
        assert context.user_payload == UserPayload(name="Jane Doe", username="jdoe", email="jane@example.com")


class TestWhenSteps:
    def test_paged_request(self, client: MagicMock, context: ScenarioContext) -> None:
        client.get_all_users.return_value = make_response(body=[{"id": 4}])
        api_steps.request_users_page(client, context, 2, 3)
        client.get_all_users.assert_called_once_with(page=2, limit=3)
        assert context.last_response.body == [{"id": 4}]

    def test_create_user_stores_new_id(self, client: MagicMock, context: ScenarioContext) -> None:
        context.user_payload = UserPayload(name="Jane Doe", username="jdoe")
        client.create_user.return_value = make_response(201, {"id": 11, "name": "Jane Doe"})
        api_steps.create_user(client, context)
        client.create_user.assert_called_once_with(context.user_payload)
        assert context.created_id == 11

    def test_create_user_without_payload(self, client: MagicMock, context: ScenarioContext) -> None:
        with pytest.raises(LookupError):
            api_steps.create_user(client, context)
        client.create_user.assert_not_called()

    def test_patch_user(self, client: MagicMock, context: ScenarioContext) -> None:
        client.patch_user.return_value = make_response(body={"id": 1, "email": "new@example.com"})
        api_steps.patch_user(client, context, 1, "email", "new@example.com")
        client.patch_user.assert_called_once_with(1, {"email": "new@example.com"})

    def test_create_post(self, client: MagicMock, context: ScenarioContext) -> None:
        client.create_post.return_value = make_response(201, {"id": 101})
        api_steps.create_post(client, context, "Hello", "World", 1)
        payload = client.create_post.call_args.args[0]
        assert payload.to_json() == {"title": "Hello", "body": "World", "userId": 1}
        assert context.created_id == 101


class TestThenSteps:
    def test_status(self, context: ScenarioContext) -> None:
        context.record_response(make_response(404, {}))
        api_steps.response_status_is(context, 404)
        with pytest.raises(AssertionError, match="Expected status 200"):
            api_steps.response_status_is(context, 200)

    def test_item_count_and_fields(self, context: ScenarioContext) -> None:
        context.record_response(make_response(body=[{"id": 1, "userId": 1}, {"id": 2, "userId": 1}]))
        api_steps.response_item_count_is(context, 2)
        api_steps.every_item_has_fields(context, "id, userId")
        api_steps.every_item_field_equals(context, "userId", 1)
        with pytest.raises(AssertionError, match="missing \\['email'\\]"):
            api_steps.every_item_has_fields(context, "id,email")

    def test_field_values(self, context: ScenarioContext) -> None:
        context.record_response(make_response(body={"id": 1, "username": "Bret"}))
        api_steps.response_field_is_int(context, "id", 1)
        api_steps.response_field_is_text(context, "username", "Bret")
        with pytest.raises(AssertionError, match="no field 'phone'"):
            api_steps.response_field_is_text(context, "phone", "x")

    def test_new_id(self, context: ScenarioContext) -> None:
        context.record_response(make_response(201, {"id": 11}))
        api_steps.response_has_new_id(context)

    def test_echo(self, context: ScenarioContext) -> None:
        context.user_payload = UserPayload(name="Jane Doe", username="jdoe")
        context.record_response(make_response(201, {"id": 11, "name": "Jane Doe", "username": "jdoe"}))
        api_steps.response_echoes_payload(context)

    def test_echo_mismatch(self, context: ScenarioContext) -> None:
        context.user_payload = UserPayload(name="Jane Doe", username="jdoe")
        context.record_response(make_response(201, {"id": 11, "name": "John"}))
        with pytest.raises(AssertionError, match="Expected name='Jane Doe'"):
            api_steps.response_echoes_payload(context)

    def test_response_time(self, context: ScenarioContext) -> None:
        context.record_response(make_response(body=[], elapsed_ms=6000.0))
        with pytest.raises(AssertionError, match="limit is 5000 ms"):
            api_steps.response_time_below(context, 5000)

    def test_header_lookup_is_case_insensitive(self, context: ScenarioContext) -> None:
        context.record_response(make_response(body=[], headers={"content-type": "application/json; charset=utf-8"}))
        api_steps.response_header_contains(context, "Content-Type", "application/json")
