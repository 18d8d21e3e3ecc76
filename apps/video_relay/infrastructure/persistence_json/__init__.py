"""JSON 파일 영속화."""

from apps.video_relay.infrastructure.persistence_json.tenant_config_store_json import (
    JsonTenantConfigStore,
)

__all__ = ["JsonTenantConfigStore"]
