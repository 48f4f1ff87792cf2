import pytest

from core.baseline import BaselineTracker
from core.threat_classifier import ThreatClassifier
from tests.helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def classifier(clock) -> ThreatClassifier:
    return ThreatClassifier(
        iaq_threshold=100.0,
        voc_threshold=1.0,
        co2_threshold=1000.0,
        pm25_threshold=35.0,
        baseline=BaselineTracker(clock=clock),
    )
