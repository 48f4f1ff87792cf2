import logging
from typing import Iterable, Optional

from .baseline import BaselineTracker
from .config import (
    CLEAN_AIR_MAX_IAQ,
    CLEAN_AIR_MAX_VOC,
    CLEAN_AIR_MIN_GAS_RESISTANCE,
    LOW_GAS_RESISTANCE,
    MASKED_ATTACK_MAX_IAQ,
    MASKED_ATTACK_MAX_VOC,
    STEALTH_CONTAMINATION_MAX_IAQ,
    STEALTH_CONTAMINATION_MAX_VOC,
    SUSPICIOUS_GAS_RESISTANCE,
)
from .models import DetectionResult, SensorSnapshot, ThresholdConfig
from .signatures import THREAT_SIGNATURES, ThreatSignature

logger = logging.getLogger(__name__)


class ThreatClassifier:
    """
    Classifies one air-quality snapshot as a named threat signature or a benign label.
    Signatures are tried in priority order; fallback heuristics and the low-resistance
    fail-safe apply only when none of them match.
    """

    def __init__(
        self,
        iaq_threshold: float,
        voc_threshold: float,
        co2_threshold: float,
        pm25_threshold: float,
        baseline: Optional[BaselineTracker] = None,
        signatures: Iterable[ThreatSignature] = THREAT_SIGNATURES,
    ) -> None:
        self.thresholds = ThresholdConfig(
            iaq_threshold=iaq_threshold,
            voc_threshold=voc_threshold,
            co2_threshold=co2_threshold,
            pm25_threshold=pm25_threshold,
        )
        self.baseline = baseline or BaselineTracker()
        self.signatures = tuple(sorted(signatures, key=lambda sig: sig.priority))

    @property
    def voc_baseline(self) -> float:
        return self.baseline.voc_baseline

    def detect(
        self,
        iaq: float,
        voc: float,
        co2: float,
        temperature: float,
        humidity: float,
        raw_gas_resistance: float,
        in_spike: bool,
        pm1: float,
        pm2_5: float,
        pm10: float,
    ) -> DetectionResult:
        """Classify the ten channel values of one sampling cycle."""
        snapshot = SensorSnapshot(
            iaq=iaq,
            voc=voc,
            co2=co2,
            temperature=temperature,
            humidity=humidity,
            raw_gas_resistance=raw_gas_resistance,
            in_spike=in_spike,
            pm1=pm1,
            pm2_5=pm2_5,
            pm10=pm10,
        )
        return self.detect_snapshot(snapshot)

    def detect_snapshot(self, snapshot: SensorSnapshot) -> DetectionResult:
        """Main pipeline: baseline update → signature table → fallback → fail-safe."""

        # 1. Every signature in this call sees the same baseline
        voc_baseline = self.baseline.update(snapshot.voc)

        # 2. Resistance flags, used only on the fallback path
        low_resistance = snapshot.raw_gas_resistance < LOW_GAS_RESISTANCE
        suspicious_resistance = snapshot.raw_gas_resistance < SUSPICIOUS_GAS_RESISTANCE

        # 3. First matching signature wins
        for signature in self.signatures:
            if signature.matches(snapshot, voc_baseline):
                is_threat, text = signature.render(snapshot, voc_baseline)
                logger.debug(
                    "Signature matched",
                    extra={"signature": signature.name, "priority": signature.priority},
                )
                return self._build_result(snapshot, is_threat, text)

        # 4. Fallback heuristics
        is_threat, text = self._fallback(snapshot, low_resistance, suspicious_resistance)

        # 5. Fail-safe: low resistance alone is enough to report contamination
        if low_resistance:
            is_threat = True

        return self._build_result(snapshot, is_threat, text)

    def set_thresholds(self, iaq: float, voc: float, co2: float, pm25: float) -> None:
        self.thresholds = ThresholdConfig(
            iaq_threshold=iaq,
            voc_threshold=voc,
            co2_threshold=co2,
            pm25_threshold=pm25,
        )

    @staticmethod
    def is_spike(current: float, baseline: float, threshold: float) -> bool:
        """Stateless excursion test; independent of the VOC baseline tracker."""
        return (current - baseline) > threshold

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _fallback(
        snapshot: SensorSnapshot,
        low_resistance: bool,
        suspicious_resistance: bool,
    ) -> tuple[bool, str]:
        """Ordered heuristics for readings no signature claimed."""
        iaq, voc, resistance = snapshot.iaq, snapshot.voc, snapshot.raw_gas_resistance

        if iaq <= STEALTH_CONTAMINATION_MAX_IAQ and voc <= STEALTH_CONTAMINATION_MAX_VOC and low_resistance:
            return True, f"STEALTH_CONTAMINATION_GasRes:{resistance:.0f}Ω"

        if iaq <= MASKED_ATTACK_MAX_IAQ and voc <= MASKED_ATTACK_MAX_VOC and suspicious_resistance:
            return True, f"MASKED_ATTACK_GasRes:{resistance:.0f}Ω"

        if iaq <= CLEAN_AIR_MAX_IAQ and voc <= CLEAN_AIR_MAX_VOC and resistance > CLEAN_AIR_MIN_GAS_RESISTANCE:
            return False, f"Clean_Air_IAQ{iaq:.0f}_VOC{voc:.2f}ppm"

        return suspicious_resistance, f"UNKNOWN_ANALYSIS_IAQ{iaq:.0f}_VOC{voc:.2f}ppm"

    @staticmethod
    def _build_result(snapshot: SensorSnapshot, is_threat: bool, signature: str) -> DetectionResult:
        if is_threat:
            logger.info("Threat detected", extra={"signature": signature, "is_threat": True})
        return DetectionResult(is_threat=is_threat, is_spike=snapshot.in_spike, signature=signature)
