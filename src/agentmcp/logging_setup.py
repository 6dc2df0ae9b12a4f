"""
Logging configuration for applications embedding agentmcp.

Library modules only call `loguru.logger`; handlers are installed here.
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """Configure logging."""
    # Remove default handler
    logger.remove()

    # Console handler
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File handler
        logger.add(
            log_path,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


def setup_logging_from_config(config) -> None:
    """Install handlers using the `logging` section of a ConfigManager."""
    level = "DEBUG" if config.get("app.debug", False) else config.get("logging.level", "INFO")
    setup_logging(level=level, log_file=config.get("logging.file"))
