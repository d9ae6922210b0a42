"""Tests for WebhookSink, driven through httpx.MockTransport."""

import json

import httpx
import pytest

from bitbench.publish.infrastructure.errors import PublishError
from bitbench.publish.infrastructure.webhook_sink import WebhookSink
from tests.publish.report_factory import make_report

_URL = "https://hooks.example.com/bitbench"


class TestWebhookSink:
    async def test_posts_report_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        sink = WebhookSink(url=_URL, transport=httpx.MockTransport(handler))

        location = await sink.publish(make_report())

        assert location == _URL
        (request,) = seen
        assert request.method == "POST"
        body = json.loads(request.content)
        assert body["suiteName"] == "Arithmetic"
        assert body["rankings"][0]["model"] == "mini"

    @pytest.mark.parametrize(("status", "retriable"), [(500, True), (429, True), (400, False)])
    async def test_error_status_raises(self, status: int, retriable: bool) -> None:
        sink = WebhookSink(
            url=_URL, transport=httpx.MockTransport(lambda request: httpx.Response(status))
        )

        with pytest.raises(PublishError) as exc_info:
            await sink.publish(make_report())

        assert exc_info.value.retriable is retriable
        assert f"HTTP {status}" in exc_info.value.reason

    async def test_connection_error_is_retriable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sink = WebhookSink(url=_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(PublishError) as exc_info:
            await sink.publish(make_report())

        assert exc_info.value.retriable is True
        assert "connection refused" in exc_info.value.reason
