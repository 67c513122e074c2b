"""
Pydantic models for the underbar utility library.

Holds the runtime settings and the small enumerations shared by the
traversal engine and the function adapters.
"""

import logging
import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionShape(str, Enum):
    """Shapes a traversal operation knows how to walk"""
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class DelayBackend(str, Enum):
    """Where delay() hands its deferred call"""
    AUTO = "auto"      # running event loop, else a timer thread
    LOOP = "loop"      # running event loop only
    THREAD = "thread"  # always a timer thread, even under a running loop


class UnderbarSettings(BaseModel):
    """Process-wide settings, read from UNDERBAR_* environment variables"""
    model_config = ConfigDict(frozen=True)

    log_level: str = Field(
        default="INFO",
        description="Level passed to logging.basicConfig"
    )
    memoize_key_separator: str = Field(
        default=", ",
        min_length=1,
        description="Text appended after each argument when building a memoize key"
    )
    delay_backend: DelayBackend = Field(
        default=DelayBackend.AUTO,
        description="Scheduling backend for delay()"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Accept any standard logging level name, case-insensitive"""
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('delay_backend', mode='before')
    @classmethod
    def normalize_delay_backend(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


ENV_PREFIX = "UNDERBAR_"

_ENV_FIELDS = {
    "log_level": "LOG_LEVEL",
    "memoize_key_separator": "MEMOIZE_SEPARATOR",
    "delay_backend": "DELAY_BACKEND",
}

_settings: Optional[UnderbarSettings] = None


def load_settings() -> UnderbarSettings:
    """Build settings from the environment, falling back to field defaults"""
    values = {}
    for field_name, suffix in _ENV_FIELDS.items():
        raw = os.environ.get(ENV_PREFIX + suffix)
        if raw is not None:
            values[field_name] = raw
    return UnderbarSettings(**values)


def get_settings() -> UnderbarSettings:
    """Return the cached settings instance, loading it on first use"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
