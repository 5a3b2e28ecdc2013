"""
Tests for the HTTP client used by the share box.
"""

import json

import httpx
import pytest

from slyp.client.api_client import ApiError, SlypApiClient


def make_client(handler) -> SlypApiClient:
    return SlypApiClient(
        token="tok",
        base_url="https://api.slyp.test",
        transport=httpx.MockTransport(handler),
    )


async def test_reslyp_posts_payload_with_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json=[{"id": "r-1"}])

    async with make_client(handler) as api:
        result = await api.reslyp("slyp-1", ["bob@example.com"], "hi")

    assert result == [{"id": "r-1"}]
    assert seen == {
        "method": "POST",
        "path": "/reslyps",
        "auth": "Bearer tok",
        "body": {"emails": ["bob@example.com"], "slyp_id": "slyp-1", "comment": "hi"},
    }


async def test_error_envelope_becomes_api_error():
    body = {
        "error": {
            "code": "RESLYP_FAILED",
            "message": "bob@example.com has already been sent this slyp",
            "details": {"email": "bob@example.com", "reason": "duplicate"},
        },
        "reslyps": [{"id": "r-1"}],
    }

    async with make_client(lambda request: httpx.Response(422, json=body)) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.reslyp("slyp-1", ["a@example.com", "bob@example.com"], "")

    error = exc_info.value
    assert error.status_code == 422
    assert error.error_code == "RESLYP_FAILED"
    assert error.details["reason"] == "duplicate"
    assert error.body["reslyps"] == [{"id": "r-1"}]


async def test_non_json_error_still_raises():
    async with make_client(lambda request: httpx.Response(502, text="Bad Gateway")) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_user_slyp("us-1")

    assert exc_info.value.status_code == 502
    assert exc_info.value.error_code == "API_ERROR"


async def test_transport_failure_is_unreachable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.update_user_slyp("us-1", archived=True)

    assert exc_info.value.status_code == 503
    assert exc_info.value.error_code == "UNREACHABLE"


async def test_search_users_sends_optional_membership():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=[])

    async with make_client(handler) as api:
        await api.search_users("bo")
        await api.search_users("bo", user_slyp_id="us-1")

    assert bodies == [{"q": "bo"}, {"q": "bo", "user_slyp_id": "us-1"}]


async def test_unreadable_success_body_raises():
    async with make_client(lambda request: httpx.Response(201, text="<html>created</html>")) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.reslyp("slyp-1", ["a@example.com"], "")

    assert exc_info.value.status_code == 201
    assert exc_info.value.error_code == "INVALID_RESPONSE"
