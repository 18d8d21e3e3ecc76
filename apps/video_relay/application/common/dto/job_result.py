"""Job Result DTO.

백엔드가 테넌트 큐로 발행하는 완료 이벤트입니다.

Wire format (JSON, camelCase):
    {
        "tenantId": "42",
        "destinationChannelId": "chan-1",
        "jobId": "job-1",
        "success": true,
        "processedFileUrl": "http://x/out.mp4",
        "caption": "done",
        "errorMessage": null
    }
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from apps.video_relay.application.common.exceptions import (
    DecodeError,
    JobResultValidationError,
)


class JobResult(BaseModel):
    """완료 이벤트 DTO.

    success=True 이면 processed_file_url, success=False 이면 error_message 필수.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
        extra="ignore",
    )

    destination_channel_id: str = Field(min_length=1)
    success: bool
    tenant_id: str | None = None
    job_id: str | None = None
    processed_file_url: str | None = None
    caption: str | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _check_success_fields(self) -> JobResult:
        if self.success and not self.processed_file_url:
            raise ValueError("processedFileUrl is required when success is true")
        if not self.success and not self.error_message:
            raise ValueError("errorMessage is required when success is false")
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobResult:
        """딕셔너리에서 JobResult 생성.

        Raises:
            JobResultValidationError: 필수 필드 누락/형식 오류
        """
        if not isinstance(data, dict):
            raise JobResultValidationError(f"expected object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
                for err in e.errors()
            )
            raise JobResultValidationError(errors) from e

    @classmethod
    def from_body(cls, body: bytes) -> JobResult:
        """메시지 body(bytes)를 디코딩하고 검증.

        Raises:
            DecodeError: UTF-8/JSON 디코딩 실패
            JobResultValidationError: 구조 검증 실패
        """
        try:
            data = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(str(e)) from e
        return cls.from_dict(data)
