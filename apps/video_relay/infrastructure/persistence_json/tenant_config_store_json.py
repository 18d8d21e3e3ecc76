"""JSON Tenant Config Store.

JSON 파일 기반 TenantConfigStore 구현.

파일 형식:
    {"<tenant_id>": "<channel_id>", ...}

변경할 때마다 문서 전체를 임시 파일에 쓰고 원자적으로 교체합니다.
메모리 상태는 쓰기가 성공한 뒤에만 갱신됩니다.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

import aiofiles
import aiofiles.os

from apps.video_relay.application.common.dto.tenant_config import TenantConfig
from apps.video_relay.application.common.exceptions import (
    ConfigLoadError,
    ConfigPersistError,
)

logger = logging.getLogger(__name__)


class JsonTenantConfigStore:
    """JSON 파일 기반 테넌트 설정 저장소.

    TenantConfigStore Protocol 구현.
    단일 writer(이 프로세스)만 파일을 수정한다고 가정합니다.
    """

    def __init__(self, file_path: str | Path) -> None:
        """초기화.

        Args:
            file_path: 설정 JSON 파일 경로
        """
        self._file_path = Path(file_path)
        self._tenants: dict[str, str] = {}
        self._lock = asyncio.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    async def load(self) -> None:
        """파일에서 설정 로드.

        파일이 없으면 빈 문서를 새로 만들고, 깨진 파일은 빈 설정으로 취급합니다.
        """
        if not await aiofiles.os.path.exists(self._file_path):
            logger.info(
                "Tenant config not found, creating empty document",
                extra={"path": str(self._file_path)},
            )
            self._tenants = {}
            try:
                await self._write({})
            except ConfigPersistError as e:
                logger.error("Failed to create tenant config", extra={"error": e.message})
            return

        try:
            self._tenants = await self._read()
        except ConfigLoadError as e:
            logger.error(
                "Tenant config unreadable, starting with no tenants",
                extra={"path": str(self._file_path), "error": e.message},
            )
            self._tenants = {}
            return

        logger.info(
            "Tenant config loaded",
            extra={"path": str(self._file_path), "tenants": len(self._tenants)},
        )

    def get(self, tenant_id: str) -> str | None:
        return self._tenants.get(str(tenant_id))

    def get_config(self, tenant_id: str) -> TenantConfig | None:
        channel_id = self.get(tenant_id)
        if channel_id is None:
            return None
        return TenantConfig(tenant_id=str(tenant_id), destination_channel_id=channel_id)

    async def set(self, tenant_id: str, channel_id: str) -> None:
        """테넌트 영상 채널 설정 (write-through).

        Raises:
            ConfigPersistError: 파일 저장 실패 (메모리 상태는 변경되지 않음)
        """
        async with self._lock:
            updated = {**self._tenants, str(tenant_id): str(channel_id)}
            await self._write(updated)
            self._tenants = updated

        logger.info(
            "Tenant channel configured",
            extra={"tenant_id": str(tenant_id), "channel_id": str(channel_id)},
        )

    def is_destination(self, tenant_id: str, channel_id: str) -> bool:
        configured = self.get(tenant_id)
        return configured is not None and configured == str(channel_id)

    def list_tenant_ids(self) -> list[str]:
        return list(self._tenants)

    async def _read(self) -> dict[str, str]:
        try:
            async with aiofiles.open(self._file_path, encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise ConfigLoadError(str(self._file_path), str(e)) from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(str(self._file_path), str(e)) from e

        if not isinstance(data, dict):
            raise ConfigLoadError(
                str(self._file_path),
                f"expected object, got {type(data).__name__}",
            )
        return {str(k): str(v) for k, v in data.items()}

    async def _write(self, tenants: dict[str, str]) -> None:
        tmp_path = self._file_path.with_name(f"{self._file_path.name}.tmp")
        try:
            await aiofiles.os.makedirs(self._file_path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(tenants, ensure_ascii=False, indent=2))
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
            await aiofiles.os.replace(tmp_path, self._file_path)
        except OSError as e:
            raise ConfigPersistError(str(self._file_path), str(e)) from e
