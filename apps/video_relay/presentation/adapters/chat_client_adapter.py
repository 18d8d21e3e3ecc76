"""Chat Client Adapter.

채팅 플랫폼(Discord gateway) 이벤트를 ChatEventHandler 호출로 바꾸는 프로토콜 어댑터입니다.

Discord gateway
        │
        │ messageCreate
        ▼
DiscordChatClient (Presentation)
        │
        ├── "!setup"        → ChatEventHandler.on_setup_command
        └── 첨부 메시지       → ChatEventHandler.on_attachment
        │
        └── 답장 (best-effort)

길드 밖(DM) 메시지와 봇 메시지는 무시합니다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import discord

from apps.video_relay.application.common.best_effort import run_best_effort
from apps.video_relay.application.common.exceptions import ChatConnectError
from apps.video_relay.presentation.handlers.chat_event_handler import Attachment

if TYPE_CHECKING:
    from apps.video_relay.presentation.handlers.chat_event_handler import (
        ChatEventHandler,
    )

logger = logging.getLogger(__name__)

SETUP_COMMAND = "setup"


def _build_client() -> discord.Client:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return discord.Client(intents=intents)


class DiscordChatClient:
    """Discord 채팅 클라이언트 어댑터.

    start()는 로그인까지 기다린 뒤 gateway 연결을 백그라운드 task로 돌립니다.
    """

    def __init__(
        self,
        handler: "ChatEventHandler",
        bot_token: str,
        command_prefix: str = "!",
        client: Any | None = None,
    ) -> None:
        """Initialize.

        Args:
            handler: 채팅 이벤트 핸들러 (DI)
            bot_token: 봇 토큰
            command_prefix: 명령어 prefix
            client: 주입할 discord.Client (테스트용)
        """
        self._handler = handler
        self._token = bot_token
        self._prefix = command_prefix
        self._client = client if client is not None else _build_client()
        self._runner: asyncio.Task[None] | None = None

        self._client.event(self.on_message)
        self._client.event(self.on_ready)

    @property
    def is_running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    async def start(self) -> None:
        """로그인 후 gateway 연결 시작.

        Raises:
            ChatConnectError: 토큰 거부 또는 로그인 실패
        """
        try:
            await self._client.login(self._token)
        except Exception as e:
            logger.error("Chat gateway login failed", extra={"error": str(e)})
            raise ChatConnectError(str(e) or type(e).__name__) from e

        self._runner = asyncio.create_task(self._client.connect(reconnect=True))
        self._runner.add_done_callback(self._on_runner_done)
        logger.info("Chat gateway connecting")

    async def stop(self) -> None:
        """연결 종료 (best-effort)."""
        await run_best_effort("close_chat_client", self._client.close())
        if self._runner is not None:
            if not self._runner.done():
                self._runner.cancel()
            await asyncio.gather(self._runner, return_exceptions=True)
            self._runner = None
        logger.info("Chat gateway closed")

    def _on_runner_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Chat gateway connection stopped",
                extra={"error": str(error), "error_type": type(error).__name__},
            )

    async def on_ready(self) -> None:
        logger.info("Chat gateway ready", extra={"user": str(self._client.user)})

    async def on_message(self, message: "discord.Message") -> None:
        """messageCreate 콜백.

        핸들러 예외는 로그로만 남기고 gateway 이벤트 루프로 전파하지 않습니다.
        """
        if message.author.bot or message.guild is None:
            return

        tenant_id = str(message.guild.id)
        channel_id = str(message.channel.id)

        try:
            reply = await self._route(message, tenant_id, channel_id)
        except Exception:
            logger.exception(
                "Chat message handling failed",
                extra={"tenant_id": tenant_id, "channel_id": channel_id},
            )
            return

        if reply is not None:
            await run_best_effort(
                "chat_reply",
                message.reply(reply),
                tenant_id=tenant_id,
                channel_id=channel_id,
            )

    async def _route(
        self,
        message: "discord.Message",
        tenant_id: str,
        channel_id: str,
    ) -> str | None:
        command = self._parse_command(message.content)
        if command == SETUP_COMMAND:
            return await self._handler.on_setup_command(
                tenant_id,
                channel_id,
                is_admin=self._is_admin(message.author),
            )
        if command is not None:
            return None

        attachments = [
            Attachment(url=a.url, file_name=a.filename, content_type=a.content_type)
            for a in message.attachments
        ]
        if not attachments:
            return None

        return await self._handler.on_attachment(
            tenant_id,
            channel_id,
            str(message.author.id),
            attachments,
        )

    def _parse_command(self, content: str) -> str | None:
        """명령어 이름 추출 (!setup foo → setup). prefix가 없으면 None."""
        if not content.startswith(self._prefix):
            return None
        args = content[len(self._prefix) :].split()
        return args[0].lower() if args else ""

    @staticmethod
    def _is_admin(author: Any) -> bool:
        permissions = getattr(author, "guild_permissions", None)
        return bool(permissions is not None and permissions.administrator)
