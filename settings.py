from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from core.config import (
    DEFAULT_CO2_THRESHOLD,
    DEFAULT_IAQ_THRESHOLD,
    DEFAULT_PM25_THRESHOLD,
    DEFAULT_VOC_THRESHOLD,
)

_LOG_LEVEL_ENV = "LOG_LEVEL"
_IAQ_THRESHOLD_ENV = "THREAT_IAQ_THRESHOLD"
_VOC_THRESHOLD_ENV = "THREAT_VOC_THRESHOLD"
_CO2_THRESHOLD_ENV = "THREAT_CO2_THRESHOLD"
_PM25_THRESHOLD_ENV = "THREAT_PM25_THRESHOLD"


@dataclass(frozen=True)
class Settings:
    log_level: str
    iaq_threshold: float
    voc_threshold: float
    co2_threshold: float
    pm25_threshold: float


def _read_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        return float(candidate)
    except ValueError:
        return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        iaq_threshold=_read_float_env(_IAQ_THRESHOLD_ENV, DEFAULT_IAQ_THRESHOLD),
        voc_threshold=_read_float_env(_VOC_THRESHOLD_ENV, DEFAULT_VOC_THRESHOLD),
        co2_threshold=_read_float_env(_CO2_THRESHOLD_ENV, DEFAULT_CO2_THRESHOLD),
        pm25_threshold=_read_float_env(_PM25_THRESHOLD_ENV, DEFAULT_PM25_THRESHOLD),
    )
