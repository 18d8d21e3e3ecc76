"""Video Relay Entry Point.

백엔드 완료 이벤트를 소비하여 테넌트 영상 채널로 전달하는 워커입니다.

Architecture:
    Discord gateway (DiscordChatClient)
        │
        ├── !setup ── ProvisionTenantCommand ── 테넌트 큐 추가
        └── 영상 첨부
              │
              └── SubmitVideoJobCommand ── POST /video ──▶ backend
                                                              │
    RabbitMQ (video.results, topic)  ◀── publish ─────────────┘
        │
        └── video.result.{tenant_id}.queue
                │
                └── ConsumerAdapter (이 워커)
                        │
                        └── RelayJobResultCommand
                                ├── HttpFileTransferManager
                                └── DiscordOutputGateway

Run:
    python -m apps.video_relay.main
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from apps.video_relay.application.common.exceptions import (
    BrokerConnectError,
    ChatConnectError,
)
from apps.video_relay.setup.config import get_settings
from apps.video_relay.setup.dependencies import Container
from apps.video_relay.setup.logging import setup_logging

logger = logging.getLogger(__name__)


class VideoRelayWorker:
    """Video Relay Worker."""

    def __init__(self) -> None:
        self._container = Container()
        self._shutdown = asyncio.Event()

    async def start(self) -> None:
        """워커 시작.

        Raises:
            BrokerConnectError: 브로커 연결 실패
        """
        settings = get_settings()
        logger.info(
            "Video Relay starting",
            extra={
                "service_name": settings.service_name,
                "service_version": settings.service_version,
                "env": settings.environment,
            },
        )

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._handle_shutdown)

        try:
            await self._container.init()
            logger.info(
                "Dependencies initialized",
                extra={"queues": sorted(self._container.gateway.bound_queues)},
            )
            await self._shutdown.wait()
        finally:
            await self._cleanup()

    def _handle_shutdown(self) -> None:
        """Graceful shutdown 핸들러."""
        logger.info("Shutdown signal received")
        self._shutdown.set()

    async def _cleanup(self) -> None:
        """리소스 정리."""
        logger.info("Shutting down", extra=self._container.consumer_adapter.stats)
        await self._container.close()
        logger.info("Video Relay stopped")


async def main() -> None:
    """Entry point."""
    setup_logging()
    worker = VideoRelayWorker()
    try:
        await worker.start()
    except (BrokerConnectError, ChatConnectError) as e:
        logger.critical("Cannot start", extra={"error": e.message})
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
