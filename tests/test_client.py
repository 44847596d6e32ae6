import asyncio
import json

import httpx
import pytest

from optimizer.client import OptimizationClient
from optimizer.errors import ErrorKind, NetworkFailure


def make_client(handler):
    return OptimizationClient(base_url="http://optimizer.test", transport=httpx.MockTransport(handler))


def test_posts_content_and_returns_optimized_text():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"optimizedContent": "John Doe, Senior Engineer"})

    result = asyncio.run(make_client(handler).optimize("John Doe, Engineer"))

    assert result == "John Doe, Senior Engineer"
    assert seen == {"path": "/api/optimize", "body": {"content": "John Doe, Engineer"}}


def test_gateway_error_status():
    def handler(request):
        return httpx.Response(500, json={"error": "Failed to optimize resume"})

    with pytest.raises(NetworkFailure) as excinfo:
        asyncio.run(make_client(handler).optimize("x"))
    assert excinfo.value.kind is ErrorKind.GENERATION_FAILED


def test_non_json_error_status():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(NetworkFailure) as excinfo:
        asyncio.run(make_client(handler).optimize("x"))
    assert excinfo.value.kind is ErrorKind.NETWORK_FAILURE


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkFailure) as excinfo:
        asyncio.run(make_client(handler).optimize("x"))
    assert excinfo.value.kind is ErrorKind.NETWORK_FAILURE


def test_success_without_content_is_a_failure():
    def handler(request):
        return httpx.Response(200, json={"unexpected": True})

    with pytest.raises(NetworkFailure):
        asyncio.run(make_client(handler).optimize("x"))


def test_success_with_invalid_json_is_a_failure():
    def handler(request):
        return httpx.Response(200, text="<html>")

    with pytest.raises(NetworkFailure):
        asyncio.run(make_client(handler).optimize("x"))


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("OPTIMIZER_API_URL", "http://resume.internal:9000")
    monkeypatch.setenv("OPTIMIZER_TIMEOUT", "5")
    client = OptimizationClient()
    assert client.base_url == "http://resume.internal:9000"
    assert client.timeout == 5.0


@pytest.mark.parametrize("optimized", ["", "   \n"])
def test_success_with_blank_content_is_a_failure(optimized):
    def handler(request):
        return httpx.Response(200, json={"optimizedContent": optimized})

    with pytest.raises(NetworkFailure):
        asyncio.run(make_client(handler).optimize("x"))
