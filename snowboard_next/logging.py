"""structlog setup shared by the fetchers, the decision engine and the runner."""
from __future__ import annotations

import logging as py_logging
import sys
import uuid
from typing import Optional

import structlog

from snowboard_next.config import LoggingConfig, app_config

_configured = False


def _renderer(config: LoggingConfig):
    if config.json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(config: Optional[LoggingConfig] = None, *, force: bool = False) -> None:
    """Configure structlog once per process.

    Records go to stderr through the stdlib root logger so the batch run keeps
    stdout free for its one-line summary.
    """
    global _configured
    if _configured and not force:
        return

    config = config or app_config.logging
    level = getattr(py_logging, str(config.level).upper(), py_logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(config),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=not force,
    )

    py_logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=force)
    _configured = True


def bind_run(mountain: str, run_id: str | None = None) -> str:
    """Attach the run id and mountain name to every record logged in this run."""
    run_id = run_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(run_id=run_id, mountain=mountain)
    return run_id


def get_logger(name: str = __name__):
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)
