# itr_engine/core/logging_config.py

import logging
import sys

from loguru import logger

from itr_engine.config.settings import settings


class InterceptHandler(logging.Handler):
    """Forward stdlib log records (engine modules, uvicorn) to loguru."""

    def emit(self, record):
        level = record.levelname
        try:
            level = logger.level(level).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str | None = None) -> None:
    """
    Configure loguru as the main logger with colored, structured logs.
    Engine modules keep using ``logging.getLogger(...)``; their records are
    redirected here together with uvicorn's.
    """
    level = (level or settings.LOG_LEVEL).upper()

    # Remove default loguru handler
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>",
        level=level,
        colorize=True,
        backtrace=False,
        diagnose=settings.DEBUG,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.getLevelName(level), force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]
    # Quieten access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
