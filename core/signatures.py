from dataclasses import dataclass
from typing import Optional, Tuple

from .config import (
    CLIMATE_RATE_LIMIT_PER_MIN,
    IAQ_ANOMALY_MAX_VOC_CHANGE,
    IAQ_ANOMALY_MIN_CHANGE,
    IAQ_CLEAN_REFERENCE,
    LPG_RESISTANCE_MAX,
    LPG_RESISTANCE_MIN,
    LPG_VOC_DEVIATION,
)
from .models import SensorSnapshot


@dataclass(frozen=True)
class ChannelWindow:
    """Closed interval on one snapshot channel. A missing bound leaves that side open."""

    channel: str
    low: Optional[float] = None
    high: Optional[float] = None

    def contains(self, snapshot: SensorSnapshot) -> bool:
        value = getattr(snapshot, self.channel)
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True


@dataclass(frozen=True)
class ThreatSignature:
    """
    One row of the threat table: a conjunction of channel windows plus the text
    template rendered when every window holds.

    Templates are plain ``str.format`` strings over the snapshot's field names, so
    numeric precision lives in the table and not in the classifier.
    """

    name: str
    priority: int
    windows: Tuple[ChannelWindow, ...]
    template: str
    is_threat: bool = True

    def matches(self, snapshot: SensorSnapshot, voc_baseline: float) -> bool:
        return all(window.contains(snapshot) for window in self.windows)

    def render(self, snapshot: SensorSnapshot, voc_baseline: float) -> Tuple[bool, str]:
        return self.is_threat, self.template.format(**snapshot.model_dump())


@dataclass(frozen=True)
class IAQAnomalySignature(ThreatSignature):
    """IAQ deterioration that VOC drift does not explain."""

    def matches(self, snapshot: SensorSnapshot, voc_baseline: float) -> bool:
        iaq_change = abs(snapshot.iaq - IAQ_CLEAN_REFERENCE)
        voc_change = abs(snapshot.voc - voc_baseline)
        return iaq_change > IAQ_ANOMALY_MIN_CHANGE and voc_change < IAQ_ANOMALY_MAX_VOC_CHANGE


@dataclass(frozen=True)
class LPGCarrierSignature(ThreatSignature):
    """
    LPG resistance fingerprint. A VOC deviation from baseline inside the LPG
    signal means something is riding on the carrier; otherwise it is LPG alone.
    """

    def render(self, snapshot: SensorSnapshot, voc_baseline: float) -> Tuple[bool, str]:
        deviation = snapshot.voc - voc_baseline
        if abs(deviation) >= LPG_VOC_DEVIATION:
            sign = "+" if deviation > 0 else "-"
            return True, f"DRUG_DELIVERY_IN_LPG_VOC{sign}{abs(deviation):.3f}ppm"
        return False, self.template.format(**snapshot.model_dump())


def _window(channel: str, low: Optional[float], high: Optional[float]) -> ChannelWindow:
    return ChannelWindow(channel=channel, low=low, high=high)


# Priority order; the first matching row wins, so overlapping windows resolve top-down.
THREAT_SIGNATURES: Tuple[ThreatSignature, ...] = (
    ThreatSignature(
        name="lethal_opioid_weapon",
        priority=1,
        windows=(
            _window("voc", 0.60, 0.70),
            _window("iaq", 70.0, 80.0),
            _window("pm2_5", 20.0, 30.0),
        ),
        template="LETHAL_OPIOID_WEAPON_VOC:{voc:.3f}_IAQ:{iaq:.1f}_EVACUATE",
    ),
    ThreatSignature(
        name="chemical_weapon_cocktail",
        priority=2,
        windows=(
            _window("voc", 0.55, 0.65),
            _window("iaq", 60.0, 70.0),
            _window("pm2_5", 22.0, 32.0),
        ),
        template="CHEMICAL_WEAPON_COCKTAIL_VOC:{voc:.3f}_IAQ:{iaq:.1f}_PM2.5:{pm2_5:.1f}",
    ),
    ThreatSignature(
        name="neurotoxin_attack",
        priority=3,
        windows=(
            _window("voc", 0.52, 0.58),
            _window("iaq", 54.0, 62.0),
            _window("pm2_5", 25.0, 35.0),
            _window("humidity", 76.0, 82.0),
        ),
        template="NEUROTOXIN_ATTACK_VOC:{voc:.3f}_IAQ:{iaq:.1f}_FOOT_TARGETING",
    ),
    ThreatSignature(
        name="heavy_metals",
        priority=4,
        windows=(
            _window("voc", 0.53, 0.58),
            _window("iaq", 54.0, 62.0),
            _window("pm2_5", 25.0, 35.0),
        ),
        template="HEAVY_METAL_ATTACK_VOC:{voc:.3f}_IAQ:{iaq:.1f}_PM2.5:{pm2_5:.1f}",
    ),
    ThreatSignature(
        name="organophosphates",
        priority=5,
        windows=(
            _window("voc", 0.52, 0.57),
            _window("iaq", 53.0, 61.0),
            _window("humidity", 76.0, 83.0),
        ),
        template="ORGANOPHOSPHATE_ATTACK_VOC:{voc:.3f}_IAQ:{iaq:.1f}_HUM:{humidity:.1f}",
    ),
    ThreatSignature(
        name="gaseous_weapon",
        priority=6,
        windows=(
            _window("iaq", 55.0, 70.0),
            _window("voc", 0.5, 0.7),
            _window("pm2_5", None, 2.0),  # gas-only delivery: no particulates
            _window("humidity", 75.0, 85.0),
        ),
        template="GASEOUS_CHEMICAL_WEAPON_IAQ:{iaq:.1f}_VOC:{voc:.3f}_PM2.5:{pm2_5:.1f}",
    ),
    ThreatSignature(
        name="opioids",
        priority=7,
        windows=(
            _window("voc", 0.58, 0.68),
            _window("iaq", 65.0, 75.0),
            _window("pm2_5", 20.0, 30.0),
        ),
        template="OPIOID_ATTACK_VOC:{voc:.3f}_IAQ:{iaq:.1f}_PM2.5:{pm2_5:.1f}",
    ),
    ThreatSignature(
        name="scopolamine",
        priority=8,
        windows=(
            _window("voc", 0.495, 0.515),
            _window("iaq", 49.5, 55.5),
            _window("pm2_5", 2.0, 9.0),
            _window("humidity", 78.0, 84.0),
            _window("temperature", 29.0, 32.0),
        ),
        template="SCOPOLAMINE_DELIVERY_IAQ:{iaq:.1f}_VOC:{voc:.3f}_PM2.5:{pm2_5:.1f}",
    ),
    ThreatSignature(
        name="bitter_knockout_drug",
        priority=9,
        windows=(
            _window("voc", 0.50, 0.55),
            _window("iaq", 50.0, 58.0),
            _window("raw_gas_resistance", 5595.0, 5605.0),
        ),
        template="BITTER_KNOCKOUT_DRUG_VOC:{voc:.3f}_IAQ:{iaq:.1f}",
    ),
    ThreatSignature(
        name="stealth_chemical_attack",
        priority=10,
        windows=(
            _window("raw_gas_resistance", 5580.0, 5620.0),
            _window("humidity", 70.0, 90.0),
            _window("temperature", 28.0, 35.0),
            _window("iaq", 45.0, 85.0),
        ),
        template="STEALTH_CHEMICAL_IAQ:{iaq:.1f}_HUM:{humidity:.1f}_TEMP:{temperature:.1f}",
    ),
    IAQAnomalySignature(
        name="iaq_anomaly_without_voc",
        priority=11,
        windows=(),
        template="IAQ_ANOMALY_NO_VOC_IAQ:{iaq:.1f}_VOC:{voc:.3f}",
    ),
    LPGCarrierSignature(
        name="lpg_carrier",
        priority=12,
        windows=(_window("raw_gas_resistance", LPG_RESISTANCE_MIN, LPG_RESISTANCE_MAX),),
        template="LPG_CARRIER_ONLY_VOC:{voc:.3f}",
        is_threat=False,
    ),
)


def detect_climate_weaponization(
    temperature: float,
    prev_temperature: float,
    humidity: float,
    prev_humidity: float,
    time_diff_ms: float,
) -> bool:
    """
    Rate-of-change check between two samples: flags temperature or humidity moving
    faster than the per-minute limit. Not part of the priority chain.
    """
    if time_diff_ms <= 0:
        return False

    minutes = time_diff_ms / 1000.0 / 60.0
    temp_rate = abs(temperature - prev_temperature) / minutes
    humidity_rate = abs(humidity - prev_humidity) / minutes

    return temp_rate > CLIMATE_RATE_LIMIT_PER_MIN or humidity_rate > CLIMATE_RATE_LIMIT_PER_MIN
