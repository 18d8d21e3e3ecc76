"""Messaging Infrastructure.

메시지 브로커 연결을 담당합니다.
- RabbitMQGateway: 연결/채널/Exchange, 테넌트 큐 프로비저닝, 소비 등록 (Infrastructure)
- ConsumerAdapter: decode/dispatch/ack (Presentation)
"""

from apps.video_relay.infrastructure.messaging.rabbitmq_gateway import (
    GatewayState,
    QueueState,
    RabbitMQGateway,
)

__all__ = ["GatewayState", "QueueState", "RabbitMQGateway"]
