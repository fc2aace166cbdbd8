"""structlog setup for the upload relay.

Every event carries the app name and environment. Events logged while an
upload request is being handled also carry its `request_id` (see
`request_log_context`), so the start, failure and completion lines of one
upload can be correlated. Production renders JSON lines; other environments
use the colored console renderer.
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from app.core.config import get_config

# Client libraries that log every request/discovery step at INFO or DEBUG
QUIET_LOGGERS = ("googleapiclient", "google_auth_httplib2", "httplib2")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp app name and environment onto an event."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def setup_logging() -> None:
    """Configure structlog and stdlib logging from Config.

    Example:
        >>> setup_logging()
        >>> get_logger(__name__).info("Upload relay listening", port=3000)
    """
    config = get_config()
    level = getattr(logging, config.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if config.is_development:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if config.is_production:
        processors.extend(
            [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.dev.ConsoleRenderer(colors=True),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def request_log_context(request_id: str | None = None, **values: Any) -> Iterator[str]:
    """Bind a request id (and extra values) to every event logged inside.

    Args:
        request_id: Id to bind, a short random hex id when None
        **values: Additional key-value pairs to bind

    Yields:
        The bound request id
    """
    request_id = request_id or uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(request_id=request_id, **values):
        yield request_id


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually with `__name__`."""
    return structlog.get_logger(name)
