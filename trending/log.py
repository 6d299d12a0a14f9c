import os
import sys
from typing import Optional

from loguru import logger


FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> None:
    """Route loguru output to stderr at TRENDING_LOG_LEVEL (INFO by default)."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=FORMAT,
        level=(level or os.getenv("TRENDING_LOG_LEVEL", "INFO")).upper(),
        colorize=sys.stderr.isatty(),
    )
