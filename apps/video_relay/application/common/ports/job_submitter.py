"""Job Submitter Port.

백엔드에 영상 처리 작업을 제출하는 인터페이스입니다.
"""

from __future__ import annotations

from typing import Protocol

from apps.video_relay.application.common.dto.job_request import JobRequest


class JobSubmissionClient(Protocol):
    """작업 제출 인터페이스.

    구현체:
        - HttpJobSubmissionClient (infrastructure/backend/)
    """

    async def submit(self, request: JobRequest) -> bool:
        """작업 제출 (재시도 없음).

        callback_queue_name은 tenant_id로부터 계산되어 채워집니다.

        Raises:
            SubmissionError: 비정상 응답 또는 타임아웃
        """
        ...
