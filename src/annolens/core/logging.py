"""Structured logging for the annolens namespace.

Every annolens module logs through get_logger(__name__): a structlog
BoundLogger wrapped around the stdlib logger of the same name, so events
are filtered by stdlib levels and reach stdlib handlers. The "annolens"
logger carries a NullHandler, so the library stays silent until the host
calls configure_logging() or attaches handlers of its own. structlog's
global configuration is never touched.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from annolens.config.models import LoggingConfig, LogOutputConfig

PACKAGE_LOGGER = "annolens"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]

_log_file_path: Path | None = None


def get_log_file_path() -> Path | None:
    """First file destination of the current configuration, if any."""
    return _log_file_path


def _level(name: str | None, default: int) -> int:
    return default if name is None else logging.getLevelName(name.upper())


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    stream = sys.stdout if output.destination == "stdout" else sys.stderr
    return structlog.dev.ConsoleRenderer(
        colors=output.destination in ("stderr", "stdout") and stream.isatty(),
        pad_event_to=0,
        pad_level=False,
    )


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route annolens events to the configured outputs.

    Args:
        config: Logging configuration with outputs. Wins over the simple params.
        json_format: One stderr output in JSON instead of console format
        level: Level for the simple setup

    Calling again replaces the previous handlers.
    """
    global _log_file_path
    from annolens.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    package_level = _level(config.level, logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        if isinstance(old, logging.NullHandler):
            continue
        package_logger.removeHandler(old)
        old.close()
    package_logger.setLevel(package_level)
    package_logger.propagate = False

    _log_file_path = next(
        (Path(o.destination) for o in config.outputs if o.destination not in ("stderr", "stdout")),
        None,
    )
    for output in config.outputs:
        handler = _create_handler(output.destination)
        handler.setLevel(_level(output.level, package_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=_SHARED_PROCESSORS,
            )
        )
        package_logger.addHandler(handler)


def _create_handler(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger inside the annolens namespace, tagged with logger=name.

    Short names are placed under "annolens" so configure_logging() sees them.
    """
    if name is None or name == PACKAGE_LOGGER:
        qualified = PACKAGE_LOGGER
    elif name.startswith(f"{PACKAGE_LOGGER}."):
        qualified = name
    else:
        qualified = f"{PACKAGE_LOGGER}.{name}"
    logger = structlog.wrap_logger(
        logging.getLogger(qualified),
        processors=[
            # Drop events below the stdlib level before doing any work
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
    return logger.bind(logger=name or PACKAGE_LOGGER)  # type: ignore[no-any-return]
