"""
structlog setup for the gallery API.

Console output while developing, one JSON object per event anywhere else.
Request and user identifiers are bound with structlog's contextvars helpers,
so any logger used while handling a request picks them up.
"""

import logging
import sys
from typing import cast

import structlog
from structlog.types import Processor

from app.config import settings

# Libraries whose INFO chatter drowns out application events
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiomysql", "multipart")


def _renderer_chain() -> list[Processor]:
    if settings.ENVIRONMENT == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging() -> None:
    """Route structlog through stdlib logging at ``settings.LOG_LEVEL``."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderer_chain(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger; call as ``logger.info("artwork_submitted", artwork_id=...)``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_request_id(request_id: str) -> None:
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)


def bind_user_id(user_id: int) -> None:
    """Tag the remaining events of this request with the caller's id."""
    structlog.contextvars.bind_contextvars(user_id=user_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
