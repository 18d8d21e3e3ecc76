"""Config 테스트."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from apps.video_relay.setup.config import MAX_UPLOAD_BYTES, Settings, get_settings


class TestSettings:
    """Settings 테스트."""

    def test_defaults(self) -> None:
        """기본값."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.service_name == "video-relay"
        assert settings.log_level == "INFO"
        assert settings.exchange_name == "video.results"
        assert settings.queue_prefix == "video.result"
        assert settings.prefetch_count == 0
        assert settings.backend_timeout_seconds == 10.0
        assert settings.download_timeout_seconds == 30.0
        assert settings.max_upload_bytes == MAX_UPLOAD_BYTES == 10 * 1024 * 1024
        assert settings.temp_dir is None
        assert settings.tenant_config_path == Path("data/tenant_settings.json")
        assert settings.chat_command_prefix == "!"
        assert settings.chat_client_enabled is True
        assert settings.log_json is True
        assert "aio_pika" in settings.quiet_loggers

    def test_settings_with_custom_values(self) -> None:
        """커스텀 값으로 Settings 생성."""
        settings = Settings(
            _env_file=None,
            amqp_url="amqp://prod:5672",
            queue_prefix="clips",
            prefetch_count=4,
            environment="prod",
        )

        assert settings.amqp_url == "amqp://prod:5672"
        assert settings.queue_prefix == "clips"
        assert settings.prefetch_count == 4
        assert settings.environment == "prod"

    def test_negative_prefetch_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, prefetch_count=-1)


class TestGetSettings:
    """get_settings 함수 테스트."""

    def setup_method(self) -> None:
        get_settings.cache_clear()

    def teardown_method(self) -> None:
        get_settings.cache_clear()

    def test_get_settings_from_env(self) -> None:
        """환경 변수에서 설정 로드."""
        env_vars = {
            "VIDEO_RELAY_AMQP_URL": "amqp://test:5672",
            "VIDEO_RELAY_BACKEND_URL": "http://backend:9000",
            "VIDEO_RELAY_MAX_UPLOAD_BYTES": "8388608",
            "VIDEO_RELAY_TEMP_DIR": "/tmp/relay",
            "VIDEO_RELAY_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            settings = get_settings()

            assert settings.amqp_url == "amqp://test:5672"
            assert settings.backend_url == "http://backend:9000"
            assert settings.max_upload_bytes == 8 * 1024 * 1024
            assert settings.temp_dir == Path("/tmp/relay")
            assert settings.log_level == "debug"

    def test_get_settings_cached(self) -> None:
        """설정 캐싱 확인."""
        with patch.dict(os.environ, {}, clear=True):
            settings1 = get_settings()
            settings2 = get_settings()

            assert settings1 is settings2  # 동일 객체
