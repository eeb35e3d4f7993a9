"""Structured logging for the tournament structure engine.

엔진은 호스트 애플리케이션 안에서 라이브러리로 동작하므로 루트 로거는
건드리지 않고 ``pokerlog`` 네임스페이스 로거에만 핸들러를 붙인다.

- production: JSON 한 줄 로그
- 그 외: 콘솔 렌더러 (터미널일 때만 색상)
- 모든 이벤트에 ``component`` (blind_clock, overrides, ...) 추가
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

LOGGER_NAMESPACE = "pokerlog"


def add_component(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """``pokerlog.tournament.blind_clock`` -> ``component="blind_clock"``."""
    name = event_dict.get("logger")
    if name and name.startswith(LOGGER_NAMESPACE + "."):
        event_dict.setdefault("component", name.rsplit(".", 1)[-1])
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    app_env: str = "development",
) -> logging.Logger:
    """Attach a structlog formatter to the ``pokerlog`` logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: If True, output JSON logs
        app_env: Application environment (production forces JSON)

    Returns:
        The configured package logger
    """
    use_json = json_logs or app_env == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_component,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if use_json:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level.upper())
    package_logger.propagate = False
    return package_logger


def configure_from_settings() -> logging.Logger:
    """Configure logging from the cached application settings."""
    from pokerlog.config import get_settings

    settings = get_settings()
    return configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        app_env=settings.app_env,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, e.g. ``get_logger(__name__)`` inside the package."""
    return structlog.get_logger(name)
