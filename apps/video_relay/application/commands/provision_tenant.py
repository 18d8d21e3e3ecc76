"""Provision Tenant Command.

테넌트의 영상 채널을 설정하고, 실행 중이면 테넌트 큐를 즉시 준비합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apps.video_relay.application.common.ports import (
        MessageBrokerGateway,
        TenantConfigStore,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionResult:
    """프로비저닝 결과.

    Attributes:
        tenant_id: 테넌트 ID
        channel_id: 설정된 영상 채널 ID
        queue_name: 소비를 시작한 큐 (gateway가 준비되지 않았으면 None)
    """

    tenant_id: str
    channel_id: str
    queue_name: str | None = None


class ProvisionTenantCommand:
    """테넌트 프로비저닝 Command.

    설정 저장 실패(ConfigPersistError)와 큐 준비 실패는 호출자에게 그대로 전파합니다.
    """

    def __init__(
        self,
        store: "TenantConfigStore",
        broker: "MessageBrokerGateway",
    ) -> None:
        """Initialize.

        Args:
            store: 테넌트 설정 저장소 (DI)
            broker: 메시지 브로커 게이트웨이 (DI)
        """
        self._store = store
        self._broker = broker

    async def execute(self, tenant_id: str, channel_id: str) -> ProvisionResult:
        await self._store.set(tenant_id, channel_id)

        if not self._broker.is_ready:
            # 시작 시 provision_all에서 처리
            logger.info(
                "Broker not ready, tenant queue deferred to startup",
                extra={"tenant_id": tenant_id},
            )
            return ProvisionResult(tenant_id=tenant_id, channel_id=channel_id)

        queue_name = await self._broker.add_tenant(tenant_id)
        return ProvisionResult(tenant_id=tenant_id, channel_id=channel_id, queue_name=queue_name)
