"""Tenant Queue Binding Value Object.

테넌트별 콜백 큐 이름 규칙입니다.
JobSubmissionClient(백엔드에 알려주는 콜백 큐)와 RabbitMQGateway(실제 선언하는 큐)가
반드시 이 규칙 하나만 사용해야 합니다.

    {prefix}.{tenant_id}.queue   (routing key == queue name)
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_QUEUE_PREFIX = "video.result"


@dataclass(frozen=True, slots=True)
class TenantQueueBinding:
    """테넌트 큐 바인딩 Value Object."""

    prefix: str
    tenant_id: str

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValueError("Queue prefix cannot be empty")
        if not self.tenant_id:
            raise ValueError("Tenant id cannot be empty")

    @classmethod
    def for_tenant(
        cls,
        tenant_id: str,
        prefix: str = DEFAULT_QUEUE_PREFIX,
    ) -> TenantQueueBinding:
        return cls(prefix=prefix, tenant_id=str(tenant_id))

    @property
    def queue_name(self) -> str:
        return f"{self.prefix}.{self.tenant_id}.queue"

    @property
    def routing_key(self) -> str:
        return self.queue_name

    def __str__(self) -> str:
        return self.queue_name
