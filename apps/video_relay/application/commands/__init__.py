"""Commands (Use Cases)."""

from apps.video_relay.application.commands.provision_tenant import (
    ProvisionTenantCommand,
)
from apps.video_relay.application.commands.relay_job_result import (
    RelayJobResultCommand,
)
from apps.video_relay.application.commands.submit_video_job import (
    SubmitVideoJobCommand,
)

__all__ = [
    "ProvisionTenantCommand",
    "RelayJobResultCommand",
    "SubmitVideoJobCommand",
]
