"""RelayResult / BestEffort 테스트."""

from __future__ import annotations

import logging

import pytest

from apps.video_relay.application.common.best_effort import run_best_effort
from apps.video_relay.application.common.result import RelayResult, RelayStatus


class TestRelayResult:
    """RelayResult 테스트."""

    def test_delivered(self) -> None:
        result = RelayResult.delivered()

        assert result.status == RelayStatus.DELIVERED
        assert result.is_delivered
        assert not result.is_reported
        assert not result.is_failed
        assert result.message is None

    def test_reported(self) -> None:
        result = RelayResult.reported("encode failed")

        assert result.is_reported
        assert result.message == "encode failed"

    def test_failed(self) -> None:
        result = RelayResult.failed("HTTP 413")

        assert result.is_failed
        assert not result.is_delivered

    def test_immutable(self) -> None:
        result = RelayResult.delivered()

        with pytest.raises(AttributeError):
            result.status = RelayStatus.FAILED  # type: ignore


class TestRunBestEffort:
    """run_best_effort 테스트."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        async def ok() -> str:
            return "ok"

        outcome = await run_best_effort("noop", ok())

        assert outcome.operation == "noop"
        assert outcome.succeeded
        assert outcome.error is None

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        """실패는 로그와 outcome으로만 남김."""
        error = ConnectionError("reset")

        async def boom() -> None:
            raise error

        with caplog.at_level(logging.WARNING):
            outcome = await run_best_effort("notify_error", boom(), channel_id="chan-1")

        assert not outcome.succeeded
        assert outcome.error is error
        assert "Best-effort operation failed" in caplog.text
