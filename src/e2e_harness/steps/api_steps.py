"""Step definitions for the JSONPlaceholder API features.

Every When step records its response in the ScenarioContext; Then steps
assert against ``scenario_context.last_response``.
"""

from typing import Any

from pytest_bdd import given, parsers, then, when

from e2e_harness.api.client import JsonPlaceholderClient
from e2e_harness.models.api import PostPayload, UserPayload
from e2e_harness.steps.context import ScenarioContext


def table_to_records(datatable: list[list[str]]) -> list[dict[str, str]]:
    """Turn a Gherkin data table (header row first) into dicts."""
    if len(datatable) < 2:
        raise ValueError("Data table needs a header row and at least one data row")
    header, *rows = datatable
    return [dict(zip(header, row)) for row in rows]


def _split_fields(fields: str) -> list[str]:
    return [field.strip() for field in fields.split(",") if field.strip()]


# ----------------------------------------------------------------------
# Given
# ----------------------------------------------------------------------


@given("a user payload:")
def given_user_payload(scenario_context: ScenarioContext, datatable: list[list[str]]) -> None:
    record = table_to_records(datatable)[0]
    scenario_context.user_payload = UserPayload.model_validate(record)


# ----------------------------------------------------------------------
# When
# ----------------------------------------------------------------------


@when("I request all users")
def request_all_users(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext) -> None:
    scenario_context.record_response(api_client.get_all_users())


@when(parsers.parse("I request users page {page:d} with limit {limit:d}"))
def request_users_page(
    api_client: JsonPlaceholderClient,
    scenario_context: ScenarioContext,
    page: int,
    limit: int,
) -> None:
    scenario_context.record_response(api_client.get_all_users(page=page, limit=limit))


@when(parsers.parse("I request the user with id {user_id:d}"))
def request_user(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, user_id: int) -> None:
    scenario_context.record_response(api_client.get_user(user_id))


@when("I create the user")
def create_user(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext) -> None:
    if scenario_context.user_payload is None:
        raise LookupError("No user payload was given in this scenario")
    response = api_client.create_user(scenario_context.user_payload)
    scenario_context.record_response(response)
    if isinstance(response.body, dict) and "id" in response.body:
        scenario_context.created_id = response.body["id"]


@when(parsers.parse("I update the user with id {user_id:d}"))
def update_user(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, user_id: int) -> None:
    if scenario_context.user_payload is None:
        raise LookupError("No user payload was given in this scenario")
    scenario_context.record_response(api_client.update_user(user_id, scenario_context.user_payload))


@when(parsers.parse('I patch the user with id {user_id:d} setting "{field}" to "{value}"'))
def patch_user(
    api_client: JsonPlaceholderClient,
    scenario_context: ScenarioContext,
    user_id: int,
    field: str,
    value: str,
) -> None:
    scenario_context.record_response(api_client.patch_user(user_id, {field: value}))


@when(parsers.parse("I delete the user with id {user_id:d}"))
def delete_user(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, user_id: int) -> None:
    scenario_context.record_response(api_client.delete_user(user_id))


@when(parsers.parse("I request the posts of user {user_id:d}"))
def request_user_posts(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, user_id: int) -> None:
    scenario_context.record_response(api_client.get_all_posts(user_id=user_id))


@when(parsers.parse("I request the post with id {post_id:d}"))
def request_post(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, post_id: int) -> None:
    scenario_context.record_response(api_client.get_post(post_id))


@when(parsers.parse("I request the comments of post {post_id:d}"))
def request_post_comments(api_client: JsonPlaceholderClient, scenario_context: ScenarioContext, post_id: int) -> None:
    scenario_context.record_response(api_client.get_post_comments(post_id))


@when(parsers.parse('I create a post titled "{title}" with body "{body}" for user {user_id:d}'))
def create_post(
    api_client: JsonPlaceholderClient,
    scenario_context: ScenarioContext,
    title: str,
    body: str,
    user_id: int,
) -> None:
    response = api_client.create_post(PostPayload(title=title, body=body, userId=user_id))
    scenario_context.record_response(response)
    if isinstance(response.body, dict) and "id" in response.body:
        scenario_context.created_id = response.body["id"]


# ----------------------------------------------------------------------
# Then
# ----------------------------------------------------------------------


@then(parsers.parse("the response status should be {status:d}"))
def response_status_is(scenario_context: ScenarioContext, status: int) -> None:
    response = scenario_context.last_response
    assert response.status == status, (
        f"Expected status {status} from {response.method} {response.url}, got {response.status}"
    )


@then(parsers.parse("the response should contain {count:d} items"))
def response_item_count_is(scenario_context: ScenarioContext, count: int) -> None:
    items = scenario_context.last_response.json_list()
    assert len(items) == count, f"Expected {count} items, got {len(items)}"


@then(parsers.parse('every item should have the fields "{fields}"'))
def every_item_has_fields(scenario_context: ScenarioContext, fields: str) -> None:
    required = _split_fields(fields)
    for index, item in enumerate(scenario_context.last_response.json_list()):
        missing = [field for field in required if field not in item]
        assert not missing, f"Item {index} is missing {missing}: {item}"


@then(parsers.parse('every item should have "{field}" equal to {value:d}'))
def every_item_field_equals(scenario_context: ScenarioContext, field: str, value: int) -> None:
    for index, item in enumerate(scenario_context.last_response.json_list()):
        assert item.get(field) == value, f"Item {index} has {field}={item.get(field)!r}, expected {value}"


@then(parsers.parse('the response field "{field}" should be {value:d}'))
def response_field_is_int(scenario_context: ScenarioContext, field: str, value: int) -> None:
    _assert_field(scenario_context, field, value)


@then(parsers.parse('the response field "{field}" should be "{value}"'))
def response_field_is_text(scenario_context: ScenarioContext, field: str, value: str) -> None:
    _assert_field(scenario_context, field, value)


def _assert_field(scenario_context: ScenarioContext, field: str, expected: Any) -> None:
    body = scenario_context.last_response.json_object()
    assert field in body, f"Response has no field {field!r}: {body}"
    assert body[field] == expected, f"Expected {field}={expected!r}, got {body[field]!r}"


@then("the response should include a new id")
def response_has_new_id(scenario_context: ScenarioContext) -> None:
    body = scenario_context.last_response.json_object()
    assert isinstance(body.get("id"), int), f"Response has no numeric id: {body}"


@then("the response should echo the user payload")
def response_echoes_payload(scenario_context: ScenarioContext) -> None:
    payload = scenario_context.user_payload
    assert payload is not None, "No user payload was given in this scenario"
    body = scenario_context.last_response.json_object()
    for field, value in payload.to_json().items():
        assert body.get(field) == value, f"Expected {field}={value!r}, got {body.get(field)!r}"


@then(parsers.parse("the response time should be below {limit_ms:d} ms"))
def response_time_below(scenario_context: ScenarioContext, limit_ms: int) -> None:
    elapsed = scenario_context.last_response.elapsed_ms
    assert elapsed < limit_ms, f"Response took {elapsed:.0f} ms, limit is {limit_ms} ms"


@then(parsers.parse('the response header "{name}" should contain "{text}"'))
def response_header_contains(scenario_context: ScenarioContext, name: str, text: str) -> None:
    headers = scenario_context.last_response.headers
    value = headers.get(name.lower(), "")
    assert text in value, f"Header {name!r} is {value!r}, expected it to contain {text!r}"
