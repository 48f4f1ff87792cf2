import logging
from functools import lru_cache
from typing import List

from core.models import DetectionResult, DetectionSummary, SensorSnapshot, ThresholdConfig
from core.threat_classifier import ThreatClassifier
from settings import get_settings

logger = logging.getLogger(__name__)


class DetectionService:
    """High-level service owning one classifier (and therefore one VOC baseline) for the process."""

    def __init__(self, classifier: ThreatClassifier) -> None:
        self.classifier = classifier

    def run_detection(self, snapshot: SensorSnapshot) -> DetectionResult:
        return self.classifier.detect_snapshot(snapshot)

    def run_batch(self, snapshots: List[SensorSnapshot]) -> DetectionSummary:
        """
        Replay a sequence of snapshots in the given order through the same classifier.

        The baseline carries over between snapshots exactly as it would in a live
        sampling loop.
        """
        results = [self.classifier.detect_snapshot(snapshot) for snapshot in snapshots]
        summary = DetectionSummary(
            results=results,
            threat_count=sum(1 for result in results if result.is_threat),
        )
        logger.info(
            "Batch classified",
            extra={"row_count": len(results), "threat_count": summary.threat_count},
        )
        return summary

    def get_thresholds(self) -> ThresholdConfig:
        return self.classifier.thresholds

    def update_thresholds(self, config: ThresholdConfig) -> ThresholdConfig:
        self.classifier.set_thresholds(
            config.iaq_threshold,
            config.voc_threshold,
            config.co2_threshold,
            config.pm25_threshold,
        )
        return self.classifier.thresholds


@lru_cache
def build_default_service() -> DetectionService:
    """Factory that wires the service with thresholds from the environment."""
    settings = get_settings()
    classifier = ThreatClassifier(
        iaq_threshold=settings.iaq_threshold,
        voc_threshold=settings.voc_threshold,
        co2_threshold=settings.co2_threshold,
        pm25_threshold=settings.pm25_threshold,
    )
    return DetectionService(classifier)
