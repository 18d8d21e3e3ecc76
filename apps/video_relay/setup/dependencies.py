"""Dependency Injection.

Clean Architecture의 Composition Root입니다.
모든 의존성을 여기서 조립합니다.
"""

from __future__ import annotations

import logging

from apps.video_relay.application.commands.provision_tenant import (
    ProvisionTenantCommand,
)
from apps.video_relay.application.commands.relay_job_result import (
    RelayJobResultCommand,
)
from apps.video_relay.application.commands.submit_video_job import (
    SubmitVideoJobCommand,
)
from apps.video_relay.infrastructure.backend.job_submission_client import (
    HttpJobSubmissionClient,
)
from apps.video_relay.infrastructure.chat.discord_output_gateway import (
    DiscordOutputGateway,
)
from apps.video_relay.infrastructure.file_transfer.http_file_transfer import (
    HttpFileTransferManager,
)
from apps.video_relay.infrastructure.messaging.rabbitmq_gateway import RabbitMQGateway
from apps.video_relay.infrastructure.persistence_json.tenant_config_store_json import (
    JsonTenantConfigStore,
)
from apps.video_relay.presentation.adapters.chat_client_adapter import DiscordChatClient
from apps.video_relay.presentation.adapters.consumer_adapter import ConsumerAdapter
from apps.video_relay.presentation.handlers.chat_event_handler import ChatEventHandler
from apps.video_relay.setup.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Container:
    """의존성 컨테이너.

    모든 의존성을 생성하고 관리합니다.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

        s = self._settings
        self._store = JsonTenantConfigStore(s.tenant_config_path)
        self._file_transfer = HttpFileTransferManager(
            temp_dir=s.temp_dir,
            max_bytes=s.max_upload_bytes,
            timeout=s.download_timeout_seconds,
        )
        self._chat_output = DiscordOutputGateway(
            bot_token=s.chat_bot_token,
            base_url=s.chat_api_base_url,
            timeout=s.chat_timeout_seconds,
        )
        self._job_client = HttpJobSubmissionClient(
            base_url=s.backend_url,
            queue_prefix=s.queue_prefix,
            timeout=s.backend_timeout_seconds,
        )

        self._relay_command = RelayJobResultCommand(self._file_transfer, self._chat_output)
        self._consumer_adapter = ConsumerAdapter(self._relay_command)
        self._gateway = RabbitMQGateway(
            s.amqp_url,
            self._consumer_adapter.on_message,
            exchange_name=s.exchange_name,
            queue_prefix=s.queue_prefix,
            prefetch_count=s.prefetch_count,
        )

        self._provision_command = ProvisionTenantCommand(self._store, self._gateway)
        self._submit_command = SubmitVideoJobCommand(self._store, self._job_client)
        self._chat_handler = ChatEventHandler(
            self._store,
            self._provision_command,
            self._submit_command,
        )
        self._chat_client = self._build_chat_client()

    def _build_chat_client(self) -> DiscordChatClient | None:
        s = self._settings
        if not s.chat_client_enabled:
            return None
        if not s.chat_bot_token:
            logger.warning("Chat bot token not configured, chat client disabled")
            return None
        return DiscordChatClient(
            self._chat_handler,
            bot_token=s.chat_bot_token,
            command_prefix=s.chat_command_prefix,
        )

    async def init(self) -> None:
        """의존성 초기화.

        Raises:
            BrokerConnectError: 브로커 연결 실패
            ChatConnectError: 채팅 gateway 로그인 실패
        """
        await self._store.load()
        await self._gateway.connect()
        await self._gateway.provision_all(self._store.list_tenant_ids())
        if self._chat_client is not None:
            await self._chat_client.start()

    async def close(self) -> None:
        """리소스 정리."""
        if self._chat_client is not None:
            await self._chat_client.stop()
        await self._gateway.disconnect()
        await self._file_transfer.close()
        await self._chat_output.close()
        await self._job_client.close()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> JsonTenantConfigStore:
        return self._store

    @property
    def gateway(self) -> RabbitMQGateway:
        return self._gateway

    @property
    def consumer_adapter(self) -> ConsumerAdapter:
        return self._consumer_adapter

    @property
    def chat_client(self) -> DiscordChatClient | None:
        return self._chat_client

    @property
    def chat_handler(self) -> ChatEventHandler:
        """채팅 클라이언트가 이벤트를 전달할 핸들러."""
        return self._chat_handler
