"""채팅 플랫폼 출력."""

from apps.video_relay.infrastructure.chat.discord_output_gateway import (
    DiscordOutputGateway,
)

__all__ = ["DiscordOutputGateway"]
