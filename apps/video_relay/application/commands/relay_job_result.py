"""Relay Job Result Command.

완료 이벤트(JobResult)를 채널로 전달하는 Use Case입니다.

success=True:
    typing 표시 → download → validate → deliver → cleanup (항상)
    실패 시 채널에 에러 알림 1회
success=False:
    채널에 에러 알림 1회 (파일 전송 없음)

어떤 경우에도 예외를 던지지 않습니다. 재시도도 하지 않습니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from apps.video_relay.application.common.dto.job_result import JobResult
from apps.video_relay.application.common.exceptions import (
    DeliveryError,
    DownloadError,
    EmptyFileError,
    FileTooLargeError,
    RelayError,
)
from apps.video_relay.application.common.result import RelayResult

if TYPE_CHECKING:
    from apps.video_relay.application.common.ports import (
        ChatOutputGateway,
        FileTransferManager,
    )

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = "처리된 영상이 도착했습니다."
JOB_FAILED_MESSAGE = "영상 처리에 실패했습니다: {reason}"
UNEXPECTED_ERROR_MESSAGE = "영상 업로드 중 오류가 발생했습니다."


def _summarize(error: RelayError) -> str:
    """작업 실패를 사용자용 메시지로 변환."""
    if isinstance(error, DownloadError):
        return "처리된 영상을 다운로드하지 못했습니다. 잠시 후 다시 시도해주세요."
    if isinstance(error, EmptyFileError):
        return "처리된 영상 파일이 비어 있습니다."
    if isinstance(error, FileTooLargeError):
        limit_mib = error.limit / (1024 * 1024)
        return f"처리된 영상이 업로드 한도({limit_mib:g}MB)를 초과했습니다."
    if isinstance(error, DeliveryError):
        return "영상 업로드에 실패했습니다."
    return f"영상 전달 중 오류가 발생했습니다: {error.message}"


class RelayJobResultCommand:
    """결과 전달 Command."""

    def __init__(
        self,
        file_transfer: "FileTransferManager",
        chat_output: "ChatOutputGateway",
    ) -> None:
        """Initialize.

        Args:
            file_transfer: 파일 전송 매니저 (DI)
            chat_output: 채팅 출력 게이트웨이 (DI)
        """
        self._transfer = file_transfer
        self._chat = chat_output

    async def execute(self, result: JobResult) -> RelayResult:
        """완료 이벤트 처리.

        Args:
            result: 검증된 완료 이벤트

        Returns:
            RelayResult
        """
        if not result.success:
            return await self._report_job_failure(result)
        return await self._deliver(result)

    async def _report_job_failure(self, result: JobResult) -> RelayResult:
        reason = result.error_message or ""
        await self._chat.notify_error(
            result.destination_channel_id,
            JOB_FAILED_MESSAGE.format(reason=reason),
        )
        logger.info(
            "Job failure reported",
            extra={
                "tenant_id": result.tenant_id,
                "job_id": result.job_id,
                "channel_id": result.destination_channel_id,
                "reason": reason,
            },
        )
        return RelayResult.reported(reason)

    async def _deliver(self, result: JobResult) -> RelayResult:
        channel_id = result.destination_channel_id
        url = result.processed_file_url or ""
        path: Path | None = None

        await self._chat.notify_upload_in_progress(channel_id)

        try:
            path = await self._transfer.download(url)
            stats = await self._transfer.validate(path)
            await self._chat.deliver(
                channel_id,
                stats.path,
                self._transfer.safe_name(url),
                result.caption or DEFAULT_CAPTION,
            )
        except RelayError as e:
            logger.warning(
                "Job result delivery failed",
                extra={
                    "tenant_id": result.tenant_id,
                    "job_id": result.job_id,
                    "channel_id": channel_id,
                    "error_type": type(e).__name__,
                    "error": e.message,
                },
            )
            await self._chat.notify_error(channel_id, _summarize(e))
            return RelayResult.failed(e.message)
        except Exception as e:
            logger.exception(
                "Unexpected error relaying job result",
                extra={"tenant_id": result.tenant_id, "job_id": result.job_id},
            )
            await self._chat.notify_error(channel_id, UNEXPECTED_ERROR_MESSAGE)
            return RelayResult.failed(str(e))
        finally:
            if path is not None:
                await self._transfer.cleanup(path)

        logger.info(
            "Job result delivered",
            extra={
                "tenant_id": result.tenant_id,
                "job_id": result.job_id,
                "channel_id": channel_id,
                "bytes": stats.size,
            },
        )
        return RelayResult.delivered()
