"""Logging 테스트."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import ecs_logging

from apps.video_relay.setup.config import Settings, get_settings
from apps.video_relay.setup.logging import setup_logging


class TestSetupLogging:
    """setup_logging 함수 테스트."""

    def setup_method(self) -> None:
        """테스트 전 설정."""
        get_settings.cache_clear()
        self._factory = logging.getLogRecordFactory()

    def teardown_method(self) -> None:
        """테스트 후 정리."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)
        logging.setLogRecordFactory(self._factory)
        get_settings.cache_clear()

    def test_setup_logging_configures_root_logger(self) -> None:
        """루트 로거 설정 확인 (소문자 레벨 허용)."""
        with patch.dict(os.environ, {"VIDEO_RELAY_LOG_LEVEL": "debug"}, clear=True):
            setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1

    def test_setup_logging_adds_service_metadata(self) -> None:
        """서비스 메타데이터 추가 확인."""
        env_vars = {
            "VIDEO_RELAY_SERVICE_NAME": "relay-test",
            "VIDEO_RELAY_SERVICE_VERSION": "1.2.3",
            "VIDEO_RELAY_ENVIRONMENT": "test",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            setup_logging()

        record = logging.getLogger("test").makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "test message",
            (),
            None,
        )

        assert record.service["name"] == "relay-test"
        assert record.service["version"] == "1.2.3"
        assert record.service["environment"] == "test"

    def test_setup_logging_silences_external_libraries(self) -> None:
        """외부 라이브러리 로그 레벨 조정."""
        with patch.dict(os.environ, {}, clear=True):
            setup_logging()

        for name in ("aio_pika", "aiormq", "httpx", "httpcore"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_quiet_loggers_configurable(self) -> None:
        """quiet_loggers / quiet_log_level 설정 반영."""
        settings = Settings(
            _env_file=None,
            quiet_loggers=["discord.gateway"],
            quiet_log_level="error",
        )

        setup_logging(settings)

        assert logging.getLogger("discord.gateway").level == logging.ERROR

    def test_text_format_for_local_runs(self) -> None:
        """log_json=False → 텍스트 포맷 (서비스 이름 포함)."""
        settings = Settings(_env_file=None, log_json=False, service_name="relay-local")

        setup_logging(settings)

        handler = logging.getLogger().handlers[0]
        assert not isinstance(handler.formatter, ecs_logging.StdlibFormatter)
        record = logging.getLogger("test").makeRecord(
            "test", logging.INFO, "test.py", 1, "hello", (), None
        )
        assert handler.format(record).endswith("[relay-local] hello")

    def test_repeated_setup_does_not_nest_factories(self) -> None:
        """재호출해도 마지막 설정의 메타데이터만 적용."""
        setup_logging(Settings(_env_file=None, service_name="first"))
        setup_logging(Settings(_env_file=None, service_name="second"))

        record = logging.getLogger("test").makeRecord(
            "test", logging.INFO, "test.py", 1, "hello", (), None
        )

        assert record.service["name"] == "second"
        assert len(logging.getLogger().handlers) == 1
