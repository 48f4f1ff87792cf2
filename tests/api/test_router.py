# tests/api/test_router.py
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from api.router import get_service
from core.baseline import BaselineTracker
from core.detection_service import DetectionService
from core.threat_classifier import ThreatClassifier
from main import app
from tests.helpers import QUIET_CHANNELS, FakeClock


@pytest.fixture
def service() -> DetectionService:
    classifier = ThreatClassifier(
        iaq_threshold=100.0,
        voc_threshold=1.0,
        co2_threshold=1000.0,
        pm25_threshold=35.0,
        baseline=BaselineTracker(clock=FakeClock()),
    )
    return DetectionService(classifier)


@pytest.fixture
def client(service) -> Iterator[TestClient]:
    app.dependency_overrides[get_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_detect_clean_air(client):
    payload = {**QUIET_CHANNELS, "iaq": 30.0, "voc": 0.2}
    response = client.post("/detect", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["is_threat"] is False
    assert data["is_spike"] is False
    assert data["signature"].startswith("Clean_Air_IAQ30_VOC0.20ppm")


def test_detect_threat_signature(client):
    payload = {**QUIET_CHANNELS, "voc": 0.65, "iaq": 75.0, "pm2_5": 25.0, "in_spike": True}
    response = client.post("/detect", json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "is_threat": True,
        "is_spike": True,
        "signature": "LETHAL_OPIOID_WEAPON_VOC:0.650_IAQ:75.0_EVACUATE",
    }


def test_detect_missing_field(client):
    payload = {"iaq": 30.0, "voc": 0.2}
    response = client.post("/detect", json=payload)

    assert response.status_code == 422
    errors = response.json()["detail"]
    assert any("raw_gas_resistance" in err["loc"] for err in errors)
    assert any("humidity" in err["loc"] for err in errors)
    assert any("pm2_5" in err["loc"] for err in errors)
    assert any("in_spike" in err["loc"] for err in errors)


def test_detect_without_particulates_is_rejected(client):
    """A gas-only looking reading with no particulate channels must not be classified."""
    payload = {
        "iaq": 66.0,
        "voc": 0.52,
        "co2": 600.0,
        "temperature": 22.0,
        "humidity": 80.0,
        "raw_gas_resistance": 50_000.0,
    }
    response = client.post("/detect", json=payload)

    assert response.status_code == 422
    errors = response.json()["detail"]
    for field in ("in_spike", "pm1", "pm2_5", "pm10"):
        assert any(field in err["loc"] for err in errors)


def test_detect_accepts_implausible_values(client):
    """Out-of-range physical values are classified, never rejected."""
    payload = {**QUIET_CHANNELS, "humidity": 140.0, "iaq": 600.0}
    response = client.post("/detect", json=payload)

    assert response.status_code == 200
    assert response.json()["signature"]


def test_batch_counts_threats(client):
    payload = [
        {**QUIET_CHANNELS, "iaq": 30.0, "voc": 0.2},
        {**QUIET_CHANNELS, "voc": 0.60, "iaq": 65.0, "pm2_5": 25.0},
        {**QUIET_CHANNELS, "iaq": 30.0, "voc": 0.2, "raw_gas_resistance": 5000.0},
    ]
    response = client.post("/detect/batch", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["threat_count"] == 2
    assert [r["is_threat"] for r in data["results"]] == [False, True, True]


def test_batch_empty_payload(client):
    response = client.post("/detect/batch", json=[])
    assert response.status_code == 422


def test_thresholds_round_trip(client, service):
    update = {
        "iaq_threshold": 150.0,
        "voc_threshold": 0.8,
        "co2_threshold": 1200.0,
        "pm25_threshold": 25.0,
    }
    response = client.put("/thresholds", json=update)

    assert response.status_code == 200
    assert response.json() == update
    assert client.get("/thresholds").json() == update
    assert service.classifier.thresholds.co2_threshold == 1200.0
