"""메시지 브로커 예외."""

from apps.video_relay.application.common.exceptions.base import RelayError


class BrokerConnectError(RelayError):
    """브로커 연결 실패 (시작 시 치명적)."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Broker unreachable: {reason}")


class MessageError(RelayError):
    """수신 메시지 처리 불가. 로그만 남기고 ack합니다."""


class DecodeError(MessageError):
    """메시지 body를 JSON으로 디코딩할 수 없음."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid message body: {reason}")


class JobResultValidationError(MessageError):
    """JobResult 필수 필드 누락 또는 형식 오류."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid job result: {reason}")
