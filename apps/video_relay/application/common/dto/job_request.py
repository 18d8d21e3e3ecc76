"""Job Request DTO.

첨부 영상 하나당 한 번 생성되어 백엔드에 제출되는 요청입니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class JobRequest:
    """영상 처리 작업 요청 DTO.

    Attributes:
        tenant_id: 테넌트(길드) ID
        destination_channel_id: 결과를 받을 채널 ID
        requester_id: 첨부를 올린 사용자 ID
        source_url: 원본 첨부 URL
        source_file_name: 원본 파일명
        callback_queue_name: 완료 이벤트를 받을 큐 (제출 시 채워짐)
    """

    tenant_id: str
    destination_channel_id: str
    requester_id: str
    source_url: str
    source_file_name: str
    callback_queue_name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """백엔드 `POST /video` body로 변환."""
        return {
            "tenantId": self.tenant_id,
            "destinationChannelId": self.destination_channel_id,
            "requesterId": self.requester_id,
            "sourceUrl": self.source_url,
            "sourceFileName": self.source_file_name,
            "callbackQueue": self.callback_queue_name,
        }
