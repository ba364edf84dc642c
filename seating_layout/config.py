from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .models import LayoutError


_PREFIX = "SEATING_LAYOUT_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_float(env: Mapping[str, str], name: str, default: float, *, positive: bool = False) -> float:
    raw = env.get(_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise LayoutError(f"{_PREFIX}{name} must be a number, got {raw!r}") from e
    if value != value or value in (float("inf"), float("-inf")):
        raise LayoutError(f"{_PREFIX}{name} must be a finite number, got {raw!r}")
    if positive and value <= 0:
        raise LayoutError(f"{_PREFIX}{name} must be positive, got {raw!r}")
    if value < 0:
        raise LayoutError(f"{_PREFIX}{name} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class EditorSettings:
    min_padding: float = 15.0
    min_section_size: float = 50.0
    default_seat_size: float = 8.0
    duplicate_offset: float = 20.0
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if env is None else env
        log_format = env.get(_PREFIX + "LOG_FORMAT", cls.log_format).strip().lower()
        if log_format not in ("console", "json"):
            raise LayoutError(f"{_PREFIX}LOG_FORMAT must be 'console' or 'json', got {log_format!r}")
        log_level = env.get(_PREFIX + "LOG_LEVEL", cls.log_level).strip().upper() or cls.log_level
        if log_level not in LOG_LEVELS:
            raise LayoutError(f"{_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
        return cls(
            min_padding=_env_float(env, "MIN_PADDING", cls.min_padding),
            min_section_size=_env_float(env, "MIN_SECTION_SIZE", cls.min_section_size, positive=True),
            default_seat_size=_env_float(env, "DEFAULT_SEAT_SIZE", cls.default_seat_size, positive=True),
            duplicate_offset=_env_float(env, "DUPLICATE_OFFSET", cls.duplicate_offset),
            log_level=log_level,
            log_format=log_format,
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> EditorSettings:
    # Read lazily so a bad variable surfaces as a LayoutError at the call site, not on import.
    return EditorSettings.from_env()
