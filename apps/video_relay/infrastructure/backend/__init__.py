"""영상 처리 백엔드 연동."""

from apps.video_relay.infrastructure.backend.job_submission_client import (
    HttpJobSubmissionClient,
)

__all__ = ["HttpJobSubmissionClient"]
