"""Chat Event Handler.

채팅 클라이언트가 호출하는 Presentation 컴포넌트입니다.

- 설정 명령: 관리자만, 현재 채널을 테넌트의 영상 채널로 지정
- 첨부: 영상 채널에 올라온 video/* 첨부를 백엔드 작업으로 제출

반환값은 채팅에 보낼 답장 텍스트입니다 (None이면 무시).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from apps.video_relay.application.common.exceptions import (
    ConfigPersistError,
    SubmissionError,
)

if TYPE_CHECKING:
    from apps.video_relay.application.commands.provision_tenant import (
        ProvisionTenantCommand,
    )
    from apps.video_relay.application.commands.submit_video_job import (
        SubmitVideoJobCommand,
    )
    from apps.video_relay.application.common.ports import TenantConfigStore

logger = logging.getLogger(__name__)

ADMIN_ONLY_REPLY = "이 명령어는 관리자만 사용할 수 있습니다."
SETUP_DONE_REPLY = "현재 채널이 비디오 채널로 설정되었습니다."
SETUP_FAILED_REPLY = "채널 설정 중 오류가 발생했습니다. 다시 시도해주세요."
JOB_ACCEPTED_REPLY = "영상 처리를 시작했습니다. 완료되면 이 채널에 업로드됩니다."
JOB_FAILED_REPLY = "영상 업로드 중 오류가 발생했습니다."


@dataclass(frozen=True)
class Attachment:
    """채팅 메시지 첨부."""

    url: str
    file_name: str
    content_type: str | None = None

    @property
    def is_video(self) -> bool:
        return bool(self.content_type) and self.content_type.startswith("video/")


class ChatEventHandler:
    """채팅 이벤트 핸들러."""

    def __init__(
        self,
        store: "TenantConfigStore",
        provision_command: "ProvisionTenantCommand",
        submit_command: "SubmitVideoJobCommand",
    ) -> None:
        self._store = store
        self._provision = provision_command
        self._submit = submit_command

    async def on_setup_command(
        self,
        tenant_id: str,
        channel_id: str,
        *,
        is_admin: bool,
    ) -> str:
        """설정 명령 처리."""
        if not is_admin:
            return ADMIN_ONLY_REPLY

        try:
            await self._provision.execute(tenant_id, channel_id)
        except ConfigPersistError as e:
            logger.error(
                "Tenant setup failed",
                extra={"tenant_id": tenant_id, "error": e.message},
            )
            return SETUP_FAILED_REPLY
        except Exception:
            # 설정은 저장되었고 큐 준비만 실패 → 재시작 시 provision_all에서 복구
            logger.exception("Tenant queue provisioning failed", extra={"tenant_id": tenant_id})
            return SETUP_FAILED_REPLY

        return SETUP_DONE_REPLY

    async def on_attachment(
        self,
        tenant_id: str,
        channel_id: str,
        requester_id: str,
        attachments: Sequence[Attachment],
        *,
        author_is_bot: bool = False,
    ) -> str | None:
        """첨부 메시지 처리."""
        if author_is_bot:
            return None
        if not self._store.is_destination(tenant_id, channel_id):
            return None

        video = next((a for a in attachments if a.is_video), None)
        if video is None:
            return None

        try:
            await self._submit.execute(
                tenant_id=tenant_id,
                requester_id=requester_id,
                source_url=video.url,
                source_file_name=video.file_name,
            )
        except SubmissionError as e:
            logger.warning(
                "Video job not submitted",
                extra={"tenant_id": tenant_id, "requester_id": requester_id, "error": e.message},
            )
            return JOB_FAILED_REPLY

        return JOB_ACCEPTED_REPLY
