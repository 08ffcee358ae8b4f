"""API Client: tests for transport error mapping and auth headers.

Invariants:
    - Non-2xx raises TransportError carrying the decoded body
    - Network errors and timeouts raise TransportError without a response
    - Bearer token comes from the SessionContext only

Design Decisions:
    - httpx.MockTransport stands in for the server: no sockets, no app
"""

import httpx
import pytest

from schooldesk.config import Settings
from schooldesk.core.error_info import describe_error
from schooldesk.core.errors import ErrorCategory, TransportError
from schooldesk.core.session_context import SessionContext
from schooldesk.infrastructure.http_client import ApiClient


def _client(handler, **kwargs) -> ApiClient:
    return ApiClient(
        "http://api.test/api", transport=httpx.MockTransport(handler), **kwargs,
    )


async def test_success_decodes_json_body():
    def handler(request):
        assert request.url.path == "/api/demo/students"
        assert request.url.params["status"] == "active"
        return httpx.Response(200, json={"success": True, "data": [{"id": "1"}]})

    async with _client(handler) as client:
        response = await client.get("/demo/students", params={"status": "active"})

    assert response.status_code == 200
    assert response.data["data"] == [{"id": "1"}]


async def test_error_status_raises_with_server_message():
    def handler(request):
        return httpx.Response(409, json={"success": False, "message": "Email taken"})

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.post("/demo/students", body={"email": "a@b.co"})

    error = exc_info.value
    assert error.status_code == 409
    assert error.message == "Request failed with status code 409"
    assert describe_error(error).message == "Email taken"


async def test_html_error_page_keeps_status_error():
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/demo/courses")

    assert exc_info.value.response.data is None
    assert describe_error(exc_info.value).message == "Request failed with status code 502"


async def test_invalid_json_on_success_raises():
    def handler(request):
        return httpx.Response(200, text="not json")

    async with _client(handler) as client:
        with pytest.raises(TransportError, match="Invalid JSON response"):
            await client.get("/demo/courses")


async def test_empty_body_decodes_to_none():
    def handler(request):
        return httpx.Response(204)

    async with _client(handler) as client:
        response = await client.delete("/demo/courses/1")

    assert response.data is None


async def test_network_error_has_no_response():
    def handler(request):
        raise httpx.ConnectError("Network Error")

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/demo/students")

    assert exc_info.value.response is None
    assert exc_info.value.status_code is None
    assert describe_error(exc_info.value).message == "Network Error"


async def test_timeout_maps_to_timeout_category():
    def handler(request):
        raise httpx.ReadTimeout("read timed out")

    async with _client(handler, timeout_seconds=10.0) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/demo/students")

    assert exc_info.value.category is ErrorCategory.TIMEOUT
    assert exc_info.value.message == "Request timed out after 10s"


async def test_bearer_token_from_session():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": []})

    session = SessionContext(token="secret")
    async with _client(handler, session=session) as client:
        await client.get("/demo/students")
        session.sign_out()
        await client.get("/demo/students")
        assert seen["auth"] is None

    session.sign_in("again")
    async with _client(handler, session=session) as client:
        await client.get("/demo/students")
    assert seen["auth"] == "Bearer again"


async def test_unauthorized_is_raised_without_clearing_token():
    def handler(request):
        return httpx.Response(401, json={"success": False, "message": "Token expired"})

    session = SessionContext(token="old")
    async with _client(handler, session=session) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/demo/students")

    assert exc_info.value.status_code == 401
    assert session.token == "old"


async def test_from_settings_uses_base_url_timeout_and_token():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": None})

    settings = Settings(
        api_base_url="http://school.test/api/", request_timeout_seconds=5,
        auth_token="tok",
    )
    client = ApiClient.from_settings(settings, transport=httpx.MockTransport(handler))
    async with client:
        await client.get("/health")

    assert client.timeout_seconds == 5
    assert seen == {"url": "http://school.test/api/health", "auth": "Bearer tok"}
