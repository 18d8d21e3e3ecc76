"""Best-effort 실행 헬퍼.

정리(cleanup), 에러 알림, 연결 종료처럼 실패해도 호출자에게 전파하면 안 되는
작업을 실행하고, 결과를 로그와 BestEffortOutcome으로 남깁니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestEffortOutcome:
    """Best-effort 작업 결과.

    Attributes:
        operation: 작업 이름 (로그용)
        succeeded: 성공 여부
        error: 실패 시 발생한 예외
    """

    operation: str
    succeeded: bool
    error: Exception | None = None


async def run_best_effort(
    operation: str,
    awaitable: Awaitable[Any],
    **context: Any,
) -> BestEffortOutcome:
    """작업을 실행하고 실패를 로그로만 남김.

    Args:
        operation: 작업 이름
        awaitable: 실행할 코루틴
        **context: 로그 extra에 추가할 값

    Returns:
        BestEffortOutcome (예외를 던지지 않음)
    """
    try:
        await awaitable
    except Exception as e:
        logger.warning(
            "Best-effort operation failed",
            extra={"operation": operation, "error": str(e), **context},
        )
        return BestEffortOutcome(operation=operation, succeeded=False, error=e)

    logger.debug(
        "Best-effort operation completed",
        extra={"operation": operation, **context},
    )
    return BestEffortOutcome(operation=operation, succeeded=True)
