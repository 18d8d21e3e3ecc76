"""Tenant Config DTO."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantConfig:
    """테넌트 → 영상 채널 매핑.

    Attributes:
        tenant_id: 테넌트(길드) ID
        destination_channel_id: 결과 영상을 올릴 채널 ID
    """

    tenant_id: str
    destination_channel_id: str
