"""HTTP Job Submission Client - JobSubmissionClient 구현체.

백엔드 `POST /video`로 영상 처리 작업을 제출합니다.

책임:
- 콜백 큐 이름 계산 (TenantQueueBinding, RabbitMQGateway와 동일 규칙)
- 타임아웃이 있는 단일 요청 (재시도 X, 호출자 정책)
"""

from __future__ import annotations

import dataclasses
import logging

import httpx

from apps.video_relay.application.common.dto.job_request import JobRequest
from apps.video_relay.application.common.exceptions import SubmissionError
from apps.video_relay.domain.value_objects.tenant_queue import (
    DEFAULT_QUEUE_PREFIX,
    TenantQueueBinding,
)

logger = logging.getLogger(__name__)


class HttpJobSubmissionClient:
    """httpx 기반 작업 제출 클라이언트.

    Attributes:
        SUBMIT_PATH: 작업 제출 엔드포인트
        DEFAULT_TIMEOUT: 기본 타임아웃 (초)
    """

    SUBMIT_PATH = "/video"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str,
        queue_prefix: str = DEFAULT_QUEUE_PREFIX,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """초기화.

        Args:
            base_url: 백엔드 기본 URL
            queue_prefix: 콜백 큐 prefix
            timeout: HTTP 타임아웃 (초)
            client: 주입할 HTTP 클라이언트 (테스트용)
        """
        self._base_url = base_url.rstrip("/")
        self._queue_prefix = queue_prefix
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 lazy 초기화."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def callback_queue_for(self, tenant_id: str) -> str:
        return TenantQueueBinding.for_tenant(tenant_id, self._queue_prefix).queue_name

    async def submit(self, request: JobRequest) -> bool:
        """작업 제출.

        Args:
            request: 작업 요청 (callback_queue_name은 여기서 채워짐)

        Returns:
            True (2xx 응답)

        Raises:
            SubmissionError: 비정상 응답, 네트워크 오류, 타임아웃
        """
        request = dataclasses.replace(
            request,
            callback_queue_name=self.callback_queue_for(request.tenant_id),
        )
        client = await self._get_client()

        try:
            response = await client.post(self.SUBMIT_PATH, json=request.to_payload())
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(
                "Job submission timed out",
                extra={"tenant_id": request.tenant_id, "timeout": self._timeout},
            )
            raise SubmissionError(f"timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Job submission rejected",
                extra={
                    "tenant_id": request.tenant_id,
                    "status_code": e.response.status_code,
                },
            )
            raise SubmissionError(f"backend returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Job submission failed",
                extra={"tenant_id": request.tenant_id, "error": str(e)},
            )
            raise SubmissionError(str(e) or type(e).__name__) from e

        logger.info(
            "Job submitted",
            extra={
                "tenant_id": request.tenant_id,
                "requester_id": request.requester_id,
                "callback_queue": request.callback_queue_name,
            },
        )
        return True
