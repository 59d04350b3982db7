"""Loguru configuration shared by the command line and the HTTP app."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.booktracker.runtime.config.config_data import ConfigData, LoggingConfig
from src.booktracker.runtime.context import get_config

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message} | {extra}"
)

SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")
QUIET_LOGGERS = ("asyncio", "httpx", "uvicorn.access")


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller of the stdlib logger, not the logging module
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, diagnose: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    serialize = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if serialize else FILE_FORMAT,
        serialize=serialize,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        diagnose=diagnose,
    )


def configure_logging(config: ConfigData | None = None) -> None:
    """Replace all loguru sinks according to the ``logging`` config section.

    Console output goes to stderr so command output on stdout stays clean.
    """
    config = config or get_config()
    cfg = config.logging
    diagnose = config.app.environment != "production"

    logger.remove()
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=CONSOLE_FORMAT,
        backtrace=diagnose,
        diagnose=diagnose,
    )
    if cfg.file:
        _add_file_sink(cfg, diagnose)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in SQL_LOGGERS:
        logging.getLogger(name).setLevel(cfg.sql_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(
        "Logging configured",
        level=cfg.level,
        format=cfg.format,
        file=cfg.file,
        sql_level=cfg.sql_level,
    )
