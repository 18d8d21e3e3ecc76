"""Value Objects."""

from apps.video_relay.domain.value_objects.tenant_queue import TenantQueueBinding

__all__ = ["TenantQueueBinding"]
