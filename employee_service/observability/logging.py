"""
Structured Logging with structlog
=============================================================================
CONCEPT: Why Structured Logging?

A plain text line like

    2025-01-15 10:30:45 INFO Updated employee 104

is hard to search and aggregate. The structured equivalent

    {"timestamp": "2025-01-15T10:30:45Z", "level": "info",
     "logger": "employee_service.services.employees",
     "event": "employee_updated", "employee_id": 104,
     "service": "Employee Service", "env": "production",
     "request_id": "6f1c...", "path": "/employees/104"}

can be filtered by any key in Loki / Elasticsearch / jq.

ONE PIPELINE FOR BOTH WORLDS:
  Our modules log through structlog; uvicorn and SQLAlchemy log through the
  stdlib `logging` module. Both end up in the same ProcessorFormatter:

    structlog event -> _common_processors() -> wrap_for_formatter --+
                                                                     |--> renderer
    stdlib record   -> foreign_pre_chain (_common_processors()) ----+

  so a uvicorn startup line and an `employee_created` event share the same
  keys and the same renderer (console while debugging, JSON otherwise).

The request middleware in main.py binds request_id, method and path into
structlog's contextvars; `merge_contextvars` copies them into every event.
=============================================================================
"""

import logging
import sys

import structlog

from employee_service.config import settings

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


def _add_service_info(logger, method_name, event_dict):
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("env", settings.app_env)
    return event_dict


def _common_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_info,
    ]


def _renderer() -> structlog.types.Processor:
    if settings.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _is_ours(handler: logging.Handler) -> bool:
    return isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)


def setup_logging() -> None:
    """
    Route structlog and stdlib logging through one structured handler on
    the root logger. Calling it again is a no-op.
    """
    root_logger = logging.getLogger()
    if any(_is_ours(h) for h in root_logger.handlers):
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_common_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_common_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(),
            ],
        )
    )

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Named structured logger; pass the module's __name__.

        logger = get_logger(__name__)
        logger.info("employee_created", employee_id=101, name="Jo-Ann Lee")
    """
    return structlog.get_logger(name)
