"""Message Broker Port.

테넌트 큐 프로비저닝 인터페이스입니다.
"""

from __future__ import annotations

from typing import Protocol


class MessageBrokerGateway(Protocol):
    """메시지 브로커 인터페이스.

    구현체:
        - RabbitMQGateway (infrastructure/messaging/)
    """

    @property
    def is_ready(self) -> bool:
        """Exchange 선언까지 완료되었는지 여부."""
        ...

    async def add_tenant(self, tenant_id: str) -> str:
        """테넌트 큐 선언/바인딩 후 소비 시작.

        Returns:
            큐 이름
        """
        ...
