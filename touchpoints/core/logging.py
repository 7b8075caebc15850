"""
Logger Configuration
Provides centralized logging setup with file and console output
"""
import logging
import logging.config
from pathlib import Path
from typing import Optional

from touchpoints.core.config import LogConfig, settings


class LogManager:
    """Applies a LogConfig; the active one is kept for inspection"""

    def __init__(self):
        self.config: Optional[LogConfig] = None

    def setup_logging(self, config: LogConfig) -> None:
        if config.FILE:
            config.FILE.parent.mkdir(parents=True, exist_ok=True)

        logging.config.dictConfig(config.log_config)
        self.config = config

        logger = logging.getLogger("touchpoints")
        logger.debug(f"Logging configured at {config.LEVEL}")
        if config.FILE:
            logger.info(f"Log file: {config.FILE}")


# Global logging manager instance
log_manager = LogManager()


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None):
    """
    Configure application logging from settings

    Args:
        level: overrides TOUCHPOINTS_LOG_LEVEL
        log_file: overrides TOUCHPOINTS_LOG_FILE and turns file logging on

    Returns:
        The `touchpoints` logger
    """
    log_manager.setup_logging(LogConfig.from_settings(settings, LEVEL=level, FILE=log_file))
    return logging.getLogger("touchpoints")
