"""
Logging Configuration for the Season Engine

Application-wide logging setup:
- Rotating file handlers (prevents unbounded log growth)
- Colored console output
- Per-package levels for the engine subsystems
- Exception logging that includes the structured context our exceptions carry

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs")

    logger = get_logger(__name__)
    logger.info("Season started")

Log Files Created:
- logs/season_engine.log: Main log (INFO+)
- logs/season_engine_debug.log: Debug log (DEBUG+), per-game detail
- logs/season_engine_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Dict, Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "season_engine"

# Engine packages and the level each gets from setup_engine_logging()
ENGINE_PACKAGES: Dict[str, str] = {
    "scheduling": "INFO",
    "standings": "INFO",
    "playoff_system": "INFO",
    "season_statistics": "WARNING",
    "training": "WARNING",
    "season": "INFO",
    "persistence": "WARNING",
}


class ColoredFormatter(logging.Formatter):
    """Console formatter adding ANSI colors to the level name."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Color a copy so file handlers sharing the record stay plain
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


def _rotating_handler(log_dir: str, suffix: str, level: int, fmt: str, max_bytes: int, backup_count: int):
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure the root logger. Call once at startup.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of rotated files to keep
        format_style: "detailed" or "simple" format for the main log
    """
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT
        root_logger.addHandler(_rotating_handler(log_dir, "", logging.INFO, main_format, max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count))

    root_logger.info(f"Logging initialized - Level: {level}, Console: {enable_console}, File: {enable_file}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (typically ``get_logger(__name__)``)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with traceback and context.

    Exceptions exposing ``to_dict()`` (SeasonException, PlayoffException,
    SchedulingException, SaveSlotError) contribute their structured fields.

    Example:
        >>> try:
        ...     state = simulator.advance_week(state)
        ... except SimulationError as e:
        ...     log_exception(logger, e, context={"slot": "autosave"})
    """
    merged = {}
    to_dict = getattr(exception, "to_dict", None)
    if callable(to_dict):
        merged.update({k: v for k, v in to_dict().items() if v not in (None, {}, [])})
    if context:
        merged.update(context)

    context_str = ""
    if merged:
        context_str = f" [{', '.join(f'{k}={v}' for k, v in merged.items())}]"

    logger.log(
        getattr(logging, level.upper()),
        f"Exception occurred{context_str}: {type(exception).__name__}: {exception}",
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set the level of one package's logger (e.g. DEBUG for "season").

    Args:
        module_name: Logger name
        level: Log level (None = inherit from root)
        propagate: Whether to propagate to parent loggers
    """
    logger = logging.getLogger(module_name)
    if level:
        logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = propagate
    return logger


def setup_engine_logging(overrides: Optional[Dict[str, str]] = None) -> None:
    """Apply ENGINE_PACKAGES levels, with optional per-package overrides."""
    levels = dict(ENGINE_PACKAGES)
    levels.update(overrides or {})
    for package, level in levels.items():
        configure_module_logger(package, level=level)


class LogContext:
    """
    Temporarily change a logger's level.

    Example:
        >>> with LogContext(get_logger("season"), "DEBUG"):
        ...     state = simulator.advance_week(state)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


def setup_testing_logging() -> None:
    """WARNING to console only, no files."""
    setup_logging(level="WARNING", enable_console=True, enable_file=False, format_style="simple")
