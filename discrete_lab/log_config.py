"""Logging setup for the discrete-lab command line.

Library modules only ever call ``structlog.get_logger(__name__)`` and emit
snake_case events; they never configure logging themselves. The CLI calls
:func:`configure_logging` once at start-up and runs each demo inside
:func:`command_context`, so every event of that run carries the command name
and a short run id.

Example:
    >>> configure_logging(level="DEBUG")
    >>> with command_context("route") as run_id:
    ...     find_shortest_path(Network.default(), "1", "4")
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

PACKAGE_LOGGER = "discrete_lab"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _renderer(json_logs: bool) -> Any:
    if json_logs:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Route structlog events through the standard library to stderr.

    The level applies to the ``discrete_lab`` logger tree, so ``--debug``
    shows the algorithms' debug events even when the root logger already
    has handlers. Standard output stays free for the demo results.

    Args:
        level: Logging level name, case-insensitive
        json_logs: Render one JSON object per line instead of key=value text

    Raises:
        ValueError: If the level name is unknown
    """
    level = level.upper()
    if level not in LEVELS:
        msg = f"Invalid log level: {level} (expected one of {', '.join(LEVELS)})"
        raise ValueError(msg)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_logs),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers are created at import, before configuration
        cache_logger_on_first_use=False,
    )


@contextmanager
def command_context(command: str, run_id: str | None = None) -> Iterator[str]:
    """Tag every log event inside the block with the command and a run id.

    The previous context is restored on exit, including after an exception.

    Args:
        command: CLI subcommand being run
        run_id: Identifier to use; a random 12-character hex id when omitted

    Yields:
        The run id in effect
    """
    run_id = run_id or uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(command=command, run_id=run_id):
        yield run_id
