from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from pacecalc.core.models import Mode


@dataclass(frozen=True)
class Settings:
    default_kph: float = 10.0
    default_pace: str = "6:00"
    default_base_pace: str = "6:00"
    default_percentages: str = "50, 60, 70, 80, 90, 100, 105, 110"
    default_mode: Mode = Mode.SPEED
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_mode(name: str, default: Mode) -> Mode:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return Mode(raw.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in Mode)
        raise ValueError(f"{name} must be one of: {choices}; got {raw!r}") from None


def _env_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    try:
        # Known to loguru: TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
        logger.level(level)
    except ValueError:
        raise ValueError(f"{name} must be a loguru level name, got {level!r}") from None
    return level


def load_settings() -> Settings:
    """
    Read PACECALC_* environment variables, falling back to the calculator's
    stock defaults (10.0 km/h, 6:00 /km, 50..110%, % of speed).
    """
    defaults = Settings()
    return Settings(
        default_kph=_env_float("PACECALC_DEFAULT_KPH", defaults.default_kph),
        default_pace=os.getenv("PACECALC_DEFAULT_PACE", defaults.default_pace),
        default_base_pace=os.getenv("PACECALC_DEFAULT_BASE_PACE", defaults.default_base_pace),
        default_percentages=os.getenv("PACECALC_DEFAULT_PERCENTAGES", defaults.default_percentages),
        default_mode=_env_mode("PACECALC_DEFAULT_MODE", defaults.default_mode),
        log_level=_env_log_level("PACECALC_LOG_LEVEL", defaults.log_level),
        log_file=os.getenv("PACECALC_LOG_FILE") or None,
    )
