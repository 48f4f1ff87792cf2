from typing import List

from pydantic import BaseModel, Field


class SensorSnapshot(BaseModel):
    """One sampling cycle of air-quality channels. Values are taken as reported, no range checks."""

    iaq: float
    voc: float
    co2: float
    temperature: float
    humidity: float
    raw_gas_resistance: float
    in_spike: bool
    pm1: float
    pm2_5: float
    pm10: float


class DetectionResult(BaseModel):
    is_threat: bool
    is_spike: bool
    signature: str = Field(..., min_length=1)


class ThresholdConfig(BaseModel):
    iaq_threshold: float
    voc_threshold: float
    co2_threshold: float
    pm25_threshold: float


class DetectionSummary(BaseModel):
    results: List[DetectionResult]
    threat_count: int
