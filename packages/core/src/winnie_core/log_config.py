"""structlog setup for applications embedding Winnie Core.

Library modules only call ``structlog.get_logger()``; the host application
calls ``configure_logging`` once at startup.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import WinnieConfig


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    extra_processors: Optional[list] = None,
) -> None:
    """Configure stdlib logging and the structlog processor chain.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render events as JSON lines instead of console text
        extra_processors: Processors to run before rendering
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if extra_processors:
        processors.extend(extra_processors)

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_from_config(config: WinnieConfig) -> None:
    configure_logging(level=config.log_level, json_output=config.log_json)
