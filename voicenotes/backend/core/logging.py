"""
Centralized Logging Configuration.

Every module logs through structlog loggers from get_logger(). Settings come
from config/settings/logging.yaml; setup_logging() arguments override them.

Structured fields in every JSON log record:
    timestamp   - ISO 8601 UTC timestamp
    level       - debug, info, warning, error, critical
    logger      - Module path (e.g., voicenotes.backend.services.note)
    event       - Log message
    func_name   - Function that emitted the log
    lineno      - Line number in source file
    source      - Caller kind: web, cli, client, api, internal or unknown
    request_id  - Request correlation ID (inside an HTTP request)
    frontend    - X-Frontend-ID of the request (inside an HTTP request)

Usage:
    from voicenotes.backend.core.logging import get_logger, setup_logging

    setup_logging()
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note trashed", extra={"note_id": note.id})

    # Outside a request, name the caller explicitly
    log_with_source(logger, "cli", "info", "Note created", note_id="abc")

Log file:
    logs/system.jsonl holds every record as JSON; filter on 'source'.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from voicenotes.backend.core.config import load_yaml_config, resolve_project_path
from voicenotes.backend.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "client",
    "api",
    "internal",
    "unknown",
})
"""Recognized values of the 'source' field. Anything else is logged as 'unknown'."""

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")
"""Third-party loggers held at WARNING regardless of the configured level."""

_logging_config: LoggingSchema | None = None


def _load_logging_config() -> LoggingSchema:
    """
    Load and validate config/settings/logging.yaml once per process.

    Raises:
        FileNotFoundError: If logging.yaml does not exist
    """
    global _logging_config
    if _logging_config is None:
        _logging_config = LoggingSchema(**load_yaml_config("logging.yaml"))
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    return resolve_project_path(configured_path)


def _normalize_source(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    source = event_dict.get("source")
    if source is not None and source not in VALID_SOURCES:
        event_dict["source"] = "unknown"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        _normalize_source,
    ]


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> RotatingFileHandler:
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Calling it again replaces the previous handlers, so entry points can
    reconfigure after parsing --verbose/--debug.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'json' or 'console'
        enable_console: Write to stdout
        enable_file_logging: Write JSON lines to the configured file
    """
    config = _load_logging_config()
    handlers = config.handlers

    log_level = getattr(logging, (level or config.level).upper())
    use_console = handlers.console.enabled if enable_console is None else enable_console
    use_file = handlers.file.enabled if enable_file_logging is None else enable_file_logging

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )
    if (format_type or config.format) == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=shared_processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if use_file:
        root_logger.addHandler(_file_handler(handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Structlog logger for a module; pass __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Used outside HTTP requests, where no middleware binds the caller
    (CLI commands, the API client).

    Raises:
        AttributeError: If level is not a valid log level

    Example:
        log_with_source(logger, "client", "info", "Note trashed", note_id="abc")
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
