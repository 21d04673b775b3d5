"""
Logging for the Minecraft skills package

Everything goes through the stdlib root logger so the structlog loggers used by
the crafting code and the plain ``logging`` loggers of the bot and data
services end up in the same places: an optional console stream and a JSON
lines file per run.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
)
from structlog.stdlib import (
    BoundLogger,
    LoggerFactory,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)

LOG_FILE_PREFIX = "minecraft_skills"


def _shared_processors() -> List:
    # Applied to structlog events and to records from plain logging loggers alike
    return [
        add_log_level,
        add_logger_name,
        TimeStamper(fmt="iso"),
        CallsiteParameterAdder(
            parameters=[CallsiteParameter.FILENAME, CallsiteParameter.LINENO, CallsiteParameter.FUNC_NAME]
        ),
        dict_tracebacks,
    ]


def _log_file_path(log_dir: str, log_file: Optional[str]) -> Path:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    if log_file is None:
        log_file = f"{LOG_FILE_PREFIX}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    return directory / log_file


def _handler(handler: logging.Handler, level: int, renderer, shared: List) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(ProcessorFormatter(processor=renderer, foreign_pre_chain=shared))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = "logs",
    console_output: bool = True,
    json_format: bool = False,
) -> Path:
    """Route all skill logging to a per-run JSON file and, optionally, stdout

    Any handlers already on the root logger are replaced, so calling this again
    (e.g. once per CLI invocation) starts a fresh log file.

    Args:
        log_level: Name of the minimum level to emit
        log_file: File name inside ``log_dir``; a timestamped name is used when omitted
        log_dir: Directory for the log file, created if missing
        console_output: Also write to stdout (the offline CLI turns this on with --verbose)
        json_format: Render stdout as JSON lines instead of the colored console layout

    Returns:
        Path of the log file
    """
    path = _log_file_path(log_dir, log_file)
    level = getattr(logging, log_level.upper())
    shared = _shared_processors()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_output:
        if json_format:
            console_renderer = structlog.processors.JSONRenderer()
        else:
            console_renderer = structlog.dev.ConsoleRenderer(colors=True, pad_event=30)
        root_logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level, console_renderer, shared))

    root_logger.addHandler(
        _handler(logging.FileHandler(path, encoding="utf-8"), level, structlog.processors.JSONRenderer(), shared)
    )

    structlog.configure(
        processors=[
            filter_by_level,
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).debug(
        "Logging initialized", log_level=log_level, log_file=str(path), console_output=console_output
    )
    return path


def get_logger(name: str) -> BoundLogger:
    """Structlog logger for a module, usually ``get_logger(__name__)``"""
    return structlog.get_logger(name)
