"""채팅 플랫폼 예외."""

from apps.video_relay.application.common.exceptions.base import RelayError


class ChatConnectError(RelayError):
    """채팅 게이트웨이 로그인 실패 (시작 시 치명적)."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Chat gateway login failed: {reason}")
