"""structlog configuration for the command line.

Library modules only ask structlog for loggers. The CLI calls
``configure_logging`` once, after which events are rendered by structlog
(console or JSON lines) and handed to a single stdlib handler on stderr,
which only transports the finished line.
"""

from __future__ import annotations

import logging
import sys

import structlog


LOGGER_NAME = "compose_graph_tools"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
