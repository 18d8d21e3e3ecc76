"""Discord Output Gateway - ChatOutputGateway Adapter.

Discord REST API(v10)로 결과 영상/에러 메시지를 채널에 전송합니다.

API:
- POST /channels/{channel_id}/messages  (multipart: payload_json + files[0])
- POST /channels/{channel_id}/typing    (업로드 진행 중 표시)
- 인증: Authorization: Bot <token>
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import aiofiles
import httpx

from apps.video_relay.application.common.best_effort import (
    BestEffortOutcome,
    run_best_effort,
)
from apps.video_relay.application.common.exceptions import DeliveryError

logger = logging.getLogger(__name__)

# 채널을 찾을 수 없거나 접근 권한 없음
_UNRESOLVED_STATUSES = (403, 404)


class DiscordOutputGateway:
    """Discord 채널 출력 게이트웨이.

    Attributes:
        BASE_URL: API 기본 URL
        DEFAULT_TIMEOUT: 기본 타임아웃 (초)
    """

    BASE_URL = "https://discord.com/api/v10"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        bot_token: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """초기화.

        Args:
            bot_token: 봇 토큰
            base_url: API 기본 URL
            timeout: HTTP 타임아웃 (초)
            client: 주입할 HTTP 클라이언트 (테스트용)
        """
        self._bot_token = bot_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 lazy 초기화."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Authorization": f"Bot {self._bot_token}"},
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def deliver(
        self,
        channel_id: str,
        path: Path,
        file_name: str,
        caption: str,
    ) -> None:
        """파일을 채널에 업로드.

        Args:
            channel_id: 대상 채널 ID
            path: 업로드할 로컬 파일
            file_name: 채널에 표시될 파일명
            caption: 메시지 본문

        Raises:
            DeliveryError: 채널을 찾을 수 없거나 업로드 거부/실패
        """
        client = await self._get_client()

        try:
            async with aiofiles.open(path, "rb") as f:
                content = await f.read()
        except OSError as e:
            raise DeliveryError(channel_id, f"cannot read {path}: {e}") from e

        payload = {
            "content": caption,
            "attachments": [{"id": 0, "filename": file_name}],
        }

        try:
            response = await client.post(
                f"/channels/{channel_id}/messages",
                data={"payload_json": json.dumps(payload, ensure_ascii=False)},
                files={"files[0]": (file_name, content, "video/mp4")},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in _UNRESOLVED_STATUSES:
                raise DeliveryError(channel_id, f"channel not resolvable (HTTP {status})") from e
            raise DeliveryError(channel_id, f"upload rejected (HTTP {status})") from e
        except httpx.HTTPError as e:
            raise DeliveryError(channel_id, str(e) or type(e).__name__) from e

        logger.info(
            "Video delivered",
            extra={"channel_id": channel_id, "file_name": file_name, "bytes": len(content)},
        )

    async def notify_error(self, channel_id: str, message: str) -> BestEffortOutcome:
        """에러 메시지 전송 (best-effort)."""
        return await run_best_effort(
            "notify_error",
            self._post_text(channel_id, message),
            channel_id=channel_id,
        )

    async def notify_upload_in_progress(self, channel_id: str) -> BestEffortOutcome:
        """타이핑 표시 (best-effort)."""
        return await run_best_effort(
            "notify_upload_in_progress",
            self._post_typing(channel_id),
            channel_id=channel_id,
        )

    async def _post_text(self, channel_id: str, content: str) -> None:
        client = await self._get_client()
        response = await client.post(
            f"/channels/{channel_id}/messages",
            json={"content": content},
        )
        response.raise_for_status()

    async def _post_typing(self, channel_id: str) -> None:
        client = await self._get_client()
        response = await client.post(f"/channels/{channel_id}/typing")
        response.raise_for_status()
