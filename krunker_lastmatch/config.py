from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError


POLL_INTERVAL_S = 4 * 60


@dataclass(frozen=True)
class Settings:
    player_name: str = ""
    token: str = ""
    poll_interval_s: float = POLL_INTERVAL_S
    log_level: str = "INFO"


def check_interval(interval: float) -> float:
    if not (interval > 0 and math.isfinite(interval)):
        raise ConfigError(f"Poll interval must be a positive number of seconds, got {interval!r}")
    return interval


def check_log_level(level: str) -> str:
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {level!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> Settings:
    """Read settings from the environment, after loading a `.env` file if one exists."""
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    raw_interval = environ.get("KRUNKER_POLL_INTERVAL", "")
    interval: float = POLL_INTERVAL_S
    if raw_interval:
        try:
            interval = float(raw_interval)
        except ValueError as e:
            raise ConfigError(f"KRUNKER_POLL_INTERVAL must be a number of seconds, got {raw_interval!r}") from e
        check_interval(interval)

    return Settings(
        player_name=environ.get("KRUNKER_USERNAME", ""),
        token=environ.get("KRUNKER_TOKEN", ""),
        poll_interval_s=interval,
        log_level=check_log_level(environ.get("LOG_LEVEL", "INFO")),
    )
