"""Relay Result.

결과 전달 Command의 처리 결과를 Application 계층의 언어로 표현합니다.
ack 여부와는 무관합니다 (ConsumerAdapter는 항상 ack).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class RelayStatus(Enum):
    """결과 전달 상태.

    - DELIVERED: 처리된 영상이 채널에 업로드됨
    - REPORTED: 백엔드 실패(success=false)를 채널에 알림
    - FAILED: 다운로드/검증/업로드 실패를 채널에 알림
    """

    DELIVERED = auto()
    REPORTED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class RelayResult:
    """결과 전달 실행 결과."""

    status: RelayStatus
    message: str | None = None

    @property
    def is_delivered(self) -> bool:
        return self.status == RelayStatus.DELIVERED

    @property
    def is_reported(self) -> bool:
        return self.status == RelayStatus.REPORTED

    @property
    def is_failed(self) -> bool:
        return self.status == RelayStatus.FAILED

    @classmethod
    def delivered(cls, message: str | None = None) -> RelayResult:
        return cls(status=RelayStatus.DELIVERED, message=message)

    @classmethod
    def reported(cls, message: str) -> RelayResult:
        return cls(status=RelayStatus.REPORTED, message=message)

    @classmethod
    def failed(cls, message: str) -> RelayResult:
        return cls(status=RelayStatus.FAILED, message=message)
