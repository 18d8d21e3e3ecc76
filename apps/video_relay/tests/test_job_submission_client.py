"""HttpJobSubmissionClient 테스트."""

from __future__ import annotations

import json

import httpx
import pytest

from apps.video_relay.application.common.dto.job_request import JobRequest
from apps.video_relay.application.common.exceptions import SubmissionError
from apps.video_relay.infrastructure.backend.job_submission_client import (
    HttpJobSubmissionClient,
)

BACKEND_URL = "http://backend.test"


@pytest.fixture
def job_request() -> JobRequest:
    """테넌트 42 작업 요청."""
    return JobRequest(
        tenant_id="42",
        destination_channel_id="chan-1",
        requester_id="user-9",
        source_url="http://x/video.mp4",
        source_file_name="video.mp4",
    )


def _client(handler) -> HttpJobSubmissionClient:
    http = httpx.AsyncClient(base_url=BACKEND_URL, transport=httpx.MockTransport(handler))
    return HttpJobSubmissionClient(BACKEND_URL, client=http)


class TestHttpJobSubmissionClient:
    """HttpJobSubmissionClient 테스트."""

    @pytest.mark.asyncio
    async def test_submit_posts_with_callback_queue(self, job_request: JobRequest) -> None:
        """POST /video, callbackQueue=video.result.42.queue."""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202, json={"jobId": "job-1"})

        client = _client(handler)

        assert await client.submit(job_request) is True

        assert len(captured) == 1
        assert captured[0].method == "POST"
        assert captured[0].url.path == "/video"
        assert json.loads(captured[0].content) == {
            "tenantId": "42",
            "destinationChannelId": "chan-1",
            "requesterId": "user-9",
            "sourceUrl": "http://x/video.mp4",
            "sourceFileName": "video.mp4",
            "callbackQueue": "video.result.42.queue",
        }

    def test_callback_queue_uses_shared_binding(self) -> None:
        """RabbitMQGateway와 동일한 큐 이름 규칙."""
        client = HttpJobSubmissionClient(BACKEND_URL, queue_prefix="custom")

        assert client.callback_queue_for("7") == "custom.7.queue"

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self, job_request: JobRequest) -> None:
        """비정상 응답시 SubmissionError."""
        client = _client(lambda request: httpx.Response(500))

        with pytest.raises(SubmissionError, match="HTTP 500"):
            await client.submit(job_request)

    @pytest.mark.asyncio
    async def test_timeout_raises(self, job_request: JobRequest) -> None:
        """타임아웃시 SubmissionError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client(handler)

        with pytest.raises(SubmissionError, match="timed out"):
            await client.submit(job_request)

    @pytest.mark.asyncio
    async def test_connection_error_raises(self, job_request: JobRequest) -> None:
        """연결 실패시 SubmissionError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = _client(handler)

        with pytest.raises(SubmissionError, match="refused"):
            await client.submit(job_request)

    @pytest.mark.asyncio
    async def test_no_retry(self, job_request: JobRequest) -> None:
        """실패해도 한 번만 요청."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503)

        client = _client(handler)

        with pytest.raises(SubmissionError):
            await client.submit(job_request)

        assert calls == 1
