"""Tenant Config Store Port.

테넌트 → 영상 채널 매핑 저장소 인터페이스입니다.
"""

from __future__ import annotations

from typing import Protocol


class TenantConfigStore(Protocol):
    """테넌트 설정 저장소 인터페이스.

    구현체:
        - JsonTenantConfigStore (infrastructure/persistence_json/)
    """

    def get(self, tenant_id: str) -> str | None:
        """테넌트의 영상 채널 ID 조회 (없으면 None)."""
        ...

    async def set(self, tenant_id: str, channel_id: str) -> None:
        """테넌트의 영상 채널 설정.

        영속화가 끝난 뒤에만 반환합니다 (write-through).

        Raises:
            ConfigPersistError: 저장 실패
        """
        ...

    def is_destination(self, tenant_id: str, channel_id: str) -> bool:
        """채널이 테넌트의 영상 채널인지 확인."""
        ...

    def list_tenant_ids(self) -> list[str]:
        """설정된 테넌트 ID 목록 (저장 순서)."""
        ...
