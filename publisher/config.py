"""Settings read from the environment (and an optional .env file)."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

DEFAULT_LOG_LEVEL = "INFO"


class PublisherSettings(BaseModel):
    """Process-wide knobs for publishers created by this package."""

    log_level: str = DEFAULT_LOG_LEVEL
    isolate_handler_errors: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level {value!r}")
        return name

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> PublisherSettings:
    """Load settings once. Invalid values fall back to the defaults."""
    load_dotenv()
    raw = {
        "log_level": os.environ.get("PUBLISHER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        "isolate_handler_errors": os.environ.get("PUBLISHER_ISOLATE_HANDLER_ERRORS", "false"),
    }
    try:
        return PublisherSettings(**raw)
    except ValueError:
        return PublisherSettings()
