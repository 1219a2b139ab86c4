"""Logging for the brewery service.

structlog renders every event; the standard library routes the rendered
lines to the console and to rotating files. Production and staging emit JSON,
everything else a coloured console format.

Request-scoped values (method, path, request id) are bound through
``structlog.contextvars`` by the HTTP middleware and appear on every line
logged while that request is handled.
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = ("production", "staging")

# Libraries that are chatty at DEBUG/INFO
_QUIET_LOGGERS = ("protean", "asyncio", "httpx", "sqlalchemy.engine", "uvicorn.access")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


@dataclass(frozen=True)
class LoggingSettings:
    environment: str
    level: str
    log_dir: Path
    file_prefix: str

    @property
    def render_json(self) -> bool:
        return self.environment in _JSON_ENVIRONMENTS


def get_environment() -> str:
    """Name of the running environment, lowercased."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def load_settings(log_dir: str = "logs", file_prefix: str = "brewery") -> LoggingSettings:
    """Read logging settings from the environment.

    ``LOG_LEVEL`` overrides the level implied by the environment name and
    ``LOG_DIR`` overrides the directory for log files.
    """
    environment = get_environment()
    level = os.getenv("LOG_LEVEL") or _LEVELS_BY_ENVIRONMENT.get(environment, "INFO")
    return LoggingSettings(
        environment=environment,
        level=level.upper(),
        log_dir=Path(os.getenv("LOG_DIR", log_dir)),
        file_prefix=file_prefix,
    )


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(settings: LoggingSettings) -> None:
    """Attach console, full-log and error-log handlers to the root logger."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.level)
    root_logger.handlers = [
        console_handler,
        _rotating_file(settings.log_dir / f"{settings.file_prefix}.log", settings.level),
        _rotating_file(settings.log_dir / f"{settings.file_prefix}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(settings: LoggingSettings):
    if settings.render_json:
        return structlog.processors.JSONRenderer()

    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def setup_structlog(settings: LoggingSettings) -> None:
    """Configure the structlog processor chain."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            _renderer(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str = "logs", file_prefix: str = "brewery") -> LoggingSettings:
    """Configure all logging for the service and return the settings used."""
    settings = load_settings(log_dir=log_dir, file_prefix=file_prefix)
    setup_stdlib_logging(settings)
    setup_structlog(settings)
    return settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str, method: str, path: str, **extra: Any) -> None:
    """Bind request details to every log line emitted while handling the request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path, **extra)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
