"""Dependencies 테스트."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from apps.video_relay.presentation.handlers.chat_event_handler import ChatEventHandler
from apps.video_relay.setup.config import Settings
from apps.video_relay.setup.dependencies import Container


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    config_path = tmp_path / "tenant_settings.json"
    config_path.write_text(json.dumps({"42": "chan-1", "7": "chan-7"}))
    return Settings(
        _env_file=None,
        tenant_config_path=config_path,
        temp_dir=tmp_path,
        queue_prefix="video.result",
    )


class TestContainer:
    """Container 테스트."""

    def test_wiring(self, settings: Settings) -> None:
        """조립 결과 확인."""
        container = Container(settings)

        assert container.settings is settings
        assert container.store.file_path == settings.tenant_config_path
        assert isinstance(container.chat_handler, ChatEventHandler)
        assert container.consumer_adapter.stats["delivered"] == 0

    @pytest.mark.asyncio
    async def test_init_provisions_persisted_tenants(self, settings: Settings) -> None:
        """시작 시 저장된 모든 테넌트 큐 준비."""
        container = Container(settings)

        with patch.object(container.gateway, "connect", new=AsyncMock()) as connect, patch.object(
            container.gateway, "provision_all", new=AsyncMock()
        ) as provision_all:
            await container.init()

        connect.assert_awaited_once()
        provision_all.assert_awaited_once_with(["42", "7"])
        assert container.store.get("7") == "chan-7"

    @pytest.mark.asyncio
    async def test_close_without_init(self, settings: Settings) -> None:
        """init() 없이 close() 호출."""
        container = Container(settings)

        # 에러 없이 종료
        await container.close()


class TestChatClientWiring:
    """채팅 클라이언트 조립 테스트."""

    def test_disabled_without_token(self, settings: Settings) -> None:
        """토큰이 없으면 채팅 클라이언트 없이 동작."""
        container = Container(settings.model_copy(update={"chat_bot_token": ""}))

        assert container.chat_client is None

    def test_disabled_by_setting(self, settings: Settings) -> None:
        container = Container(
            settings.model_copy(update={"chat_bot_token": "t", "chat_client_enabled": False})
        )

        assert container.chat_client is None

    @pytest.mark.asyncio
    async def test_started_after_broker_and_stopped_first(self, settings: Settings) -> None:
        """브로커 준비 후 로그인, 종료 시 브로커보다 먼저 닫음."""
        with patch(
            "apps.video_relay.presentation.adapters.chat_client_adapter._build_client",
            return_value=MagicMock(),
        ):
            container = Container(settings.model_copy(update={"chat_bot_token": "t"}))

        manager = MagicMock()
        gateway = container.gateway
        chat_client = container.chat_client
        assert chat_client is not None

        with patch.object(gateway, "connect", new=AsyncMock()), patch.object(
            gateway, "provision_all", new=AsyncMock()
        ) as provision_all, patch.object(
            gateway, "disconnect", new=AsyncMock()
        ) as disconnect, patch.object(
            chat_client, "start", new=AsyncMock()
        ) as start, patch.object(
            chat_client, "stop", new=AsyncMock()
        ) as stop:
            manager.attach_mock(provision_all, "provision_all")
            manager.attach_mock(start, "start")
            manager.attach_mock(stop, "stop")
            manager.attach_mock(disconnect, "disconnect")

            await container.init()
            await container.close()

        assert [c[0] for c in manager.mock_calls] == [
            "provision_all",
            "start",
            "stop",
            "disconnect",
        ]
