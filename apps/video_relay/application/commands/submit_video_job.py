"""Submit Video Job Command.

영상 채널에 올라온 첨부를 백엔드 작업으로 제출하는 Use Case입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.video_relay.application.common.dto.job_request import JobRequest
from apps.video_relay.application.common.exceptions import SubmissionError

if TYPE_CHECKING:
    from apps.video_relay.application.common.ports import (
        JobSubmissionClient,
        TenantConfigStore,
    )

logger = logging.getLogger(__name__)


class SubmitVideoJobCommand:
    """작업 제출 Command."""

    def __init__(
        self,
        store: "TenantConfigStore",
        submitter: "JobSubmissionClient",
    ) -> None:
        """Initialize.

        Args:
            store: 테넌트 설정 저장소 (DI)
            submitter: 작업 제출 클라이언트 (DI)
        """
        self._store = store
        self._submitter = submitter

    async def execute(
        self,
        tenant_id: str,
        requester_id: str,
        source_url: str,
        source_file_name: str,
    ) -> JobRequest:
        """작업 제출.

        Returns:
            제출한 JobRequest

        Raises:
            SubmissionError: 테넌트 미설정 또는 백엔드 제출 실패
        """
        channel_id = self._store.get(tenant_id)
        if channel_id is None:
            raise SubmissionError(f"tenant {tenant_id} has no video channel")

        request = JobRequest(
            tenant_id=tenant_id,
            destination_channel_id=channel_id,
            requester_id=requester_id,
            source_url=source_url,
            source_file_name=source_file_name,
        )
        await self._submitter.submit(request)
        return request
