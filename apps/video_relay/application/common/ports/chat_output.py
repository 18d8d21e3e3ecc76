"""Chat Output Port.

채팅 채널로의 결과 전달 인터페이스입니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from apps.video_relay.application.common.best_effort import BestEffortOutcome


class ChatOutputGateway(Protocol):
    """채팅 출력 인터페이스.

    구현체:
        - DiscordOutputGateway (infrastructure/chat/)
    """

    async def deliver(
        self,
        channel_id: str,
        path: Path,
        file_name: str,
        caption: str,
    ) -> None:
        """파일을 채널에 업로드.

        Raises:
            DeliveryError: 채널을 찾을 수 없거나 업로드 거부
        """
        ...

    async def notify_error(self, channel_id: str, message: str) -> BestEffortOutcome:
        """에러 메시지 전송 (best-effort, 예외 없음)."""
        ...

    async def notify_upload_in_progress(self, channel_id: str) -> BestEffortOutcome:
        """업로드 진행 중 표시 (best-effort, 예외 없음)."""
        ...
