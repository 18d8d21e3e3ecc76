"""Ports (Interfaces).

Infrastructure와의 계약을 정의하는 인터페이스입니다.
"""

from apps.video_relay.application.common.ports.chat_output import ChatOutputGateway
from apps.video_relay.application.common.ports.file_transfer import (
    FileStats,
    FileTransferManager,
)
from apps.video_relay.application.common.ports.job_submitter import (
    JobSubmissionClient,
)
from apps.video_relay.application.common.ports.message_broker import (
    MessageBrokerGateway,
)
from apps.video_relay.application.common.ports.tenant_config_store import (
    TenantConfigStore,
)

__all__ = [
    "ChatOutputGateway",
    "FileStats",
    "FileTransferManager",
    "JobSubmissionClient",
    "MessageBrokerGateway",
    "TenantConfigStore",
]
