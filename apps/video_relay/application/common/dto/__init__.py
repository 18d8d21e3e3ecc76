"""Application DTOs."""

from apps.video_relay.application.common.dto.job_request import JobRequest
from apps.video_relay.application.common.dto.job_result import JobResult
from apps.video_relay.application.common.dto.tenant_config import TenantConfig

__all__ = ["JobRequest", "JobResult", "TenantConfig"]
