"""RabbitMQ Gateway.

하나의 연결/채널 위에서 테넌트별 durable 큐를 topic exchange에 바인딩하고
소비를 등록하는 Infrastructure 컴포넌트입니다.

    video.results (topic, durable)
        ├── video.result.42.queue   (routing key = queue name)
        ├── video.result.77.queue
        └── ...

상태:
    Gateway: DISCONNECTED → CONNECTED → READY (exchange 선언 완료)
    Queue:   UNBOUND → DECLARED → BOUND → CONSUMING

테넌트마다 큐가 분리되어 있어 한 테넌트의 실패가 다른 테넌트의 선언/바인딩/소비에
영향을 주지 않습니다.
"""

from __future__ import annotations

import asyncio
import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable

import aio_pika
from aio_pika import ExchangeType

from apps.video_relay.application.common.best_effort import run_best_effort
from apps.video_relay.application.common.exceptions import BrokerConnectError
from apps.video_relay.domain.value_objects.tenant_queue import (
    DEFAULT_QUEUE_PREFIX,
    TenantQueueBinding,
)

if TYPE_CHECKING:
    from aio_pika.abc import (
        AbstractChannel,
        AbstractExchange,
        AbstractIncomingMessage,
        AbstractQueue,
        AbstractRobustConnection,
    )

logger = logging.getLogger(__name__)

MessageCallback = Callable[["AbstractIncomingMessage"], Awaitable[None]]


class GatewayState(IntEnum):
    DISCONNECTED = 0
    CONNECTED = 1
    READY = 2


class QueueState(IntEnum):
    UNBOUND = 0
    DECLARED = 1
    BOUND = 2
    CONSUMING = 3


class RabbitMQGateway:
    """RabbitMQ 게이트웨이.

    MQ 연결과 테넌트 큐 토폴로지를 담당합니다.
    메시지 처리(decode/dispatch/ack)는 ConsumerAdapter에 위임합니다.
    """

    DEFAULT_EXCHANGE_NAME = "video.results"

    def __init__(
        self,
        amqp_url: str,
        callback: MessageCallback,
        exchange_name: str = DEFAULT_EXCHANGE_NAME,
        queue_prefix: str = DEFAULT_QUEUE_PREFIX,
        prefetch_count: int = 0,
    ) -> None:
        """Initialize.

        Args:
            amqp_url: RabbitMQ 연결 URL
            callback: 메시지 처리 콜백 (ConsumerAdapter.on_message)
            exchange_name: topic exchange 이름
            queue_prefix: 테넌트 큐 prefix
            prefetch_count: 채널 QoS prefetch (0이면 설정하지 않음)
        """
        self._amqp_url = amqp_url
        self._callback = callback
        self._exchange_name = exchange_name
        self._queue_prefix = queue_prefix
        self._prefetch_count = prefetch_count

        self._connection: AbstractRobustConnection | None = None
        self._channel: AbstractChannel | None = None
        self._exchange: AbstractExchange | None = None
        self._state = GatewayState.DISCONNECTED

        self._queues: dict[str, AbstractQueue] = {}
        self._queue_states: dict[str, QueueState] = {}
        self._consumer_tags: dict[str, str] = {}
        # 큐 이름별 lock: 같은 테넌트의 동시 프로비저닝을 직렬화
        self._queue_locks: dict[str, asyncio.Lock] = {}

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == GatewayState.READY

    @property
    def bound_queues(self) -> frozenset[str]:
        """선언 + 바인딩(+ 소비)까지 끝난 큐 이름 집합."""
        return frozenset(
            name for name, state in self._queue_states.items() if state >= QueueState.BOUND
        )

    def binding_for(self, tenant_id: str) -> TenantQueueBinding:
        return TenantQueueBinding.for_tenant(tenant_id, self._queue_prefix)

    def queue_state(self, tenant_id: str) -> QueueState:
        return self._queue_states.get(self.binding_for(tenant_id).queue_name, QueueState.UNBOUND)

    async def connect(self) -> None:
        """RabbitMQ 연결 + topic exchange 선언.

        Raises:
            BrokerConnectError: 브로커에 연결할 수 없음 (치명적)
        """
        try:
            self._connection = await aio_pika.connect_robust(self._amqp_url)
            self._channel = await self._connection.channel()
            self._state = GatewayState.CONNECTED

            if self._prefetch_count > 0:
                await self._channel.set_qos(prefetch_count=self._prefetch_count)

            self._exchange = await self._channel.declare_exchange(
                self._exchange_name,
                ExchangeType.TOPIC,
                durable=True,
            )
        except Exception as e:
            logger.error(
                "RabbitMQ connection failed",
                extra={"exchange": self._exchange_name, "error": str(e)},
            )
            raise BrokerConnectError(str(e) or type(e).__name__) from e

        self._state = GatewayState.READY
        logger.info(
            "RabbitMQ connected",
            extra={"exchange": self._exchange_name, "prefetch": self._prefetch_count},
        )

    def _lock_for(self, name: str) -> asyncio.Lock:
        return self._queue_locks.setdefault(name, asyncio.Lock())

    def _advance(self, name: str, state: QueueState) -> None:
        """큐 상태 전이 (낮은 상태로 되돌리지 않음)."""
        if state > self._queue_states.get(name, QueueState.UNBOUND):
            self._queue_states[name] = state

    async def ensure_tenant_queue(self, tenant_id: str) -> str:
        """테넌트 큐 선언 + 바인딩 (idempotent).

        이미 바인딩된 큐는 브로커에 다시 묻지 않고 추적 집합으로 판단합니다.

        Returns:
            큐 이름
        """
        binding = self.binding_for(tenant_id)
        async with self._lock_for(binding.queue_name):
            await self._declare_and_bind(binding)
        return binding.queue_name

    async def _declare_and_bind(self, binding: TenantQueueBinding) -> None:
        if self._channel is None or self._exchange is None:
            raise RuntimeError("Not connected. Call connect() first.")

        name = binding.queue_name
        if self._queue_states.get(name, QueueState.UNBOUND) >= QueueState.BOUND:
            return

        queue = await self._channel.declare_queue(
            name,
            durable=True,
            auto_delete=False,
        )
        self._queues[name] = queue
        self._advance(name, QueueState.DECLARED)

        await queue.bind(self._exchange, routing_key=binding.routing_key)
        self._advance(name, QueueState.BOUND)

        logger.info(
            "Tenant queue bound",
            extra={
                "tenant_id": binding.tenant_id,
                "queue": name,
                "exchange": self._exchange_name,
            },
        )

    async def start_consuming(self, tenant_id: str) -> str:
        """테넌트 큐 소비 시작 (no_ack=False: 수동 ack).

        Returns:
            consumer tag
        """
        name = self.binding_for(tenant_id).queue_name
        async with self._lock_for(name):
            return await self._consume(name)

    async def _consume(self, name: str) -> str:
        state = self._queue_states.get(name, QueueState.UNBOUND)

        if state == QueueState.CONSUMING:
            return self._consumer_tags[name]
        if state < QueueState.BOUND:
            raise RuntimeError(f"Queue {name} is not bound. Call ensure_tenant_queue() first.")

        tag = await self._queues[name].consume(self._callback, no_ack=False)
        self._consumer_tags[name] = tag
        self._advance(name, QueueState.CONSUMING)

        logger.info("Started consuming messages", extra={"queue": name})
        return tag

    async def add_tenant(self, tenant_id: str) -> str:
        """실행 중 새로 설정된 테넌트의 큐를 준비하고 소비 시작.

        같은 테넌트에 대한 동시 호출은 하나의 consumer만 등록합니다.

        Returns:
            큐 이름
        """
        if not self.is_ready:
            raise RuntimeError("Gateway not ready. Call connect() first.")

        binding = self.binding_for(tenant_id)
        async with self._lock_for(binding.queue_name):
            await self._declare_and_bind(binding)
            await self._consume(binding.queue_name)
        return binding.queue_name

    async def provision_all(self, tenant_ids: Iterable[str]) -> list[str]:
        """시작 시 모든 테넌트 큐를 선언/바인딩한 뒤 소비 시작.

        한 테넌트의 실패는 로그만 남기고 나머지를 계속 진행합니다.

        Returns:
            소비 중인 큐 이름 목록
        """
        requested = list(tenant_ids)
        bound: list[str] = []
        for tenant_id in requested:
            try:
                await self.ensure_tenant_queue(tenant_id)
                bound.append(tenant_id)
            except Exception:
                logger.exception("Failed to provision tenant queue", extra={"tenant_id": tenant_id})

        consuming: list[str] = []
        for tenant_id in bound:
            try:
                await self.start_consuming(tenant_id)
                consuming.append(self.binding_for(tenant_id).queue_name)
            except Exception:
                logger.exception("Failed to start tenant consumer", extra={"tenant_id": tenant_id})

        logger.info(
            "Tenant queues provisioned",
            extra={"consuming": len(consuming), "failed": len(requested) - len(consuming)},
        )
        return consuming

    async def disconnect(self) -> None:
        """채널 → 연결 순서로 종료 (best-effort, 예외 없음)."""
        if self._channel is not None and not self._channel.is_closed:
            await run_best_effort("close_channel", self._channel.close())
        if self._connection is not None and not self._connection.is_closed:
            outcome = await run_best_effort("close_connection", self._connection.close())
            if outcome.succeeded:
                logger.info("RabbitMQ connection closed")

        self._channel = None
        self._connection = None
        self._exchange = None
        self._queues.clear()
        self._queue_states.clear()
        self._consumer_tags.clear()
        self._queue_locks.clear()
        self._state = GatewayState.DISCONNECTED
