"""Logging Configuration.

운영에서는 ECS JSON, 로컬에서는 사람이 읽는 텍스트 로그를 stdout으로 출력합니다.

모든 레코드에 service 메타데이터(name/version/environment)가 붙고,
브로커/HTTP/채팅 클라이언트 라이브러리 로그는 settings.quiet_loggers 레벨로 낮춥니다.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

import ecs_logging

from apps.video_relay.setup.config import Settings, get_settings

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(service_name)s] %(message)s"

# setup_logging 재호출 시 factory가 중첩되지 않도록 원본 보관
_base_record_factory: Callable[..., logging.LogRecord] | None = None


def _build_formatter(settings: Settings) -> logging.Formatter:
    if settings.log_json:
        return ecs_logging.StdlibFormatter()
    return logging.Formatter(_TEXT_FORMAT)


def _install_service_metadata(settings: Settings) -> None:
    global _base_record_factory
    if _base_record_factory is None:
        _base_record_factory = logging.getLogRecordFactory()
    base_factory = _base_record_factory

    service = {
        "name": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment,
    }

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = base_factory(*args, **kwargs)
        record.service = service
        record.service_name = settings.service_name
        return record

    logging.setLogRecordFactory(record_factory)


def setup_logging(settings: Settings | None = None) -> None:
    """로깅 설정.

    Args:
        settings: 설정 (None이면 get_settings())
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(settings))

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _install_service_metadata(settings)

    quiet_level = settings.quiet_log_level.upper()
    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(quiet_level)
