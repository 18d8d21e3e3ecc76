"""video_relay 테스트 공통 Fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from apps.video_relay.application.common.best_effort import BestEffortOutcome
from apps.video_relay.application.common.ports.file_transfer import FileStats


@pytest.fixture
def success_event() -> dict[str, Any]:
    """성공 완료 이벤트."""
    return {
        "tenantId": "42",
        "destinationChannelId": "chan-1",
        "jobId": "job-1",
        "success": True,
        "processedFileUrl": "http://x/out.mp4",
        "caption": "done",
    }


@pytest.fixture
def failure_event() -> dict[str, Any]:
    """실패 완료 이벤트."""
    return {
        "tenantId": "42",
        "destinationChannelId": "chan-1",
        "jobId": "job-2",
        "success": False,
        "errorMessage": "encode failed",
    }


@pytest.fixture
def temp_video(tmp_path: Path) -> Path:
    """500000 바이트 임시 영상 파일."""
    path = tmp_path / "downloaded.mp4"
    path.write_bytes(b"\x00" * 500_000)
    return path


@pytest.fixture
def mock_file_transfer(temp_video: Path) -> MagicMock:
    """Mock FileTransferManager."""
    transfer = MagicMock()
    transfer.download = AsyncMock(return_value=temp_video)
    transfer.validate = AsyncMock(return_value=FileStats(path=temp_video, size=500_000))
    transfer.safe_name = MagicMock(side_effect=lambda url: url.rsplit("/", 1)[-1] + ".mp4")
    transfer.cleanup = AsyncMock()
    return transfer


@pytest.fixture
def mock_chat_output() -> AsyncMock:
    """Mock ChatOutputGateway."""
    chat = AsyncMock()
    chat.deliver = AsyncMock()
    chat.notify_error = AsyncMock(
        return_value=BestEffortOutcome(operation="notify_error", succeeded=True)
    )
    chat.notify_upload_in_progress = AsyncMock(
        return_value=BestEffortOutcome(operation="notify_upload_in_progress", succeeded=True)
    )
    return chat


@pytest.fixture
def mock_store() -> MagicMock:
    """Mock TenantConfigStore (tenant 42 → chan-1)."""
    tenants = {"42": "chan-1"}
    store = MagicMock()
    store.get = MagicMock(side_effect=tenants.get)
    store.set = AsyncMock()
    store.is_destination = MagicMock(side_effect=lambda t, c: tenants.get(t) == c)
    store.list_tenant_ids = MagicMock(return_value=list(tenants))
    return store


def make_message(body: bytes | dict[str, Any], routing_key: str = "video.result.42.queue") -> MagicMock:
    """RabbitMQ 메시지 Mock 생성."""
    message = MagicMock()
    message.body = body if isinstance(body, bytes) else json.dumps(body).encode()
    message.routing_key = routing_key
    message.ack = AsyncMock()
    message.nack = AsyncMock()
    message.reject = AsyncMock()
    return message


@pytest.fixture
def message_factory():
    """make_message fixture 버전."""
    return make_message
