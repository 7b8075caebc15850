"""
Logging Configuration
Builds the dictConfig for the `touchpoints` logger tree from Settings
"""
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .base import Settings

# Driver and server loggers that are chatty at INFO
NOISY_LOGGERS = ("pymongo", "uvicorn.access")


class LogConfig(BaseModel):
    """Logging configuration settings"""

    LEVEL: str = Field("INFO", description="Level for the touchpoints loggers")
    FORMAT: str = Field(
        "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s",
        description="Log format string"
    )
    FILE: Optional[Path] = Field(None, description="Append logs here as well as to stderr")
    THIRD_PARTY_LEVEL: str = Field("WARNING", description="Level for NOISY_LOGGERS")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "LogConfig":
        values = {
            "LEVEL": settings.LOG_LEVEL,
            "FILE": Path(settings.LOG_FILE) if settings.LOG_TO_FILE else None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def _handlers(self) -> Dict[str, dict]:
        handlers = {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
            }
        }
        if self.FILE:
            handlers["file"] = {
                "class": "logging.FileHandler",
                "filename": str(self.FILE),
                "formatter": "standard",
                "encoding": "utf-8",
            }
        return handlers

    @property
    def log_config(self) -> dict:
        """dictConfig payload; levels are set on loggers, not handlers"""
        handlers = self._handlers()
        loggers = {
            "touchpoints": {
                "handlers": list(handlers),
                "level": self.LEVEL.upper(),
                "propagate": False,
            }
        }
        for name in NOISY_LOGGERS:
            loggers[name] = {"level": self.THIRD_PARTY_LEVEL.upper()}

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.FORMAT}},
            "handlers": handlers,
            "loggers": loggers,
        }
