"""TenantQueueBinding 테스트."""

from __future__ import annotations

import pytest

from apps.video_relay.domain.value_objects.tenant_queue import TenantQueueBinding


class TestTenantQueueBinding:
    """TenantQueueBinding 테스트."""

    def test_queue_name_format(self) -> None:
        """{prefix}.{tenant_id}.queue 형식."""
        binding = TenantQueueBinding.for_tenant("42")

        assert binding.queue_name == "video.result.42.queue"
        assert str(binding) == "video.result.42.queue"

    def test_routing_key_equals_queue_name(self) -> None:
        """routing key는 큐 이름과 동일."""
        binding = TenantQueueBinding.for_tenant("42", prefix="custom")

        assert binding.routing_key == binding.queue_name == "custom.42.queue"

    def test_numeric_tenant_id_is_stringified(self) -> None:
        """숫자 tenant id도 문자열로 처리."""
        binding = TenantQueueBinding.for_tenant(42)  # type: ignore[arg-type]

        assert binding.tenant_id == "42"

    def test_empty_tenant_rejected(self) -> None:
        """빈 tenant id 거부."""
        with pytest.raises(ValueError):
            TenantQueueBinding.for_tenant("")

    def test_immutable(self) -> None:
        """frozen=True 확인."""
        binding = TenantQueueBinding.for_tenant("42")

        with pytest.raises(AttributeError):
            binding.tenant_id = "43"  # type: ignore[misc]
