"""Consumer Adapter.

MQ semantics를 담당하는 프로토콜 어댑터입니다.

RabbitMQGateway (Infra)
        │
        │ message (bytes)
        ▼
ConsumerAdapter (Presentation)
        │
        │ JobResult (검증 완료)
        ▼
RelayJobResultCommand (Application)
        │
        │ RelayResult
        ▼
ConsumerAdapter
        │
        └── ack (항상, 마지막 단계)

잘못된 메시지는 다시 처리해도 유효해지지 않으므로 requeue하지 않고 ack합니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.video_relay.application.common.dto.job_result import JobResult
from apps.video_relay.application.common.exceptions import (
    DecodeError,
    JobResultValidationError,
)

if TYPE_CHECKING:
    from aio_pika.abc import AbstractIncomingMessage

    from apps.video_relay.application.commands.relay_job_result import (
        RelayJobResultCommand,
    )

logger = logging.getLogger(__name__)

_BODY_PREVIEW_BYTES = 200


class ConsumerAdapter:
    """Consumer 어댑터.

    모든 메시지는 결과와 무관하게 정확히 한 번 ack됩니다.
    """

    def __init__(self, command: "RelayJobResultCommand") -> None:
        """Initialize.

        Args:
            command: 결과 전달 Command (DI)
        """
        self._command = command
        self._delivered = 0
        self._reported = 0
        self._failed = 0
        self._dropped = 0

    async def on_message(self, message: "AbstractIncomingMessage") -> None:
        """메시지 처리 콜백.

        Args:
            message: RabbitMQ 메시지
        """
        try:
            await self._dispatch(message)
        except (DecodeError, JobResultValidationError) as e:
            self._dropped += 1
            logger.error(
                "Dropping malformed job result",
                extra={
                    "routing_key": message.routing_key,
                    "error": e.message,
                    "body": message.body[:_BODY_PREVIEW_BYTES].decode("utf-8", "replace"),
                },
            )
        except Exception:
            self._failed += 1
            logger.exception(
                "Unexpected error in consumer adapter",
                extra={"routing_key": message.routing_key},
            )
        finally:
            await self._ack(message)

    async def _dispatch(self, message: "AbstractIncomingMessage") -> None:
        job_result = JobResult.from_body(message.body)
        result = await self._command.execute(job_result)

        if result.is_delivered:
            self._delivered += 1
        elif result.is_reported:
            self._reported += 1
        else:
            self._failed += 1

    async def _ack(self, message: "AbstractIncomingMessage") -> None:
        try:
            await message.ack()
        except Exception as e:
            logger.error(
                "Failed to ack message",
                extra={"routing_key": message.routing_key, "error": str(e)},
            )

    @property
    def stats(self) -> dict[str, int]:
        """통계 반환."""
        return {
            "delivered": self._delivered,
            "reported": self._reported,
            "failed": self._failed,
            "dropped": self._dropped,
        }
