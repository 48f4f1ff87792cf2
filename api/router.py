from typing import List

from fastapi import APIRouter, Depends

from core.detection_service import DetectionService, build_default_service
from core.models import DetectionResult, DetectionSummary, SensorSnapshot, ThresholdConfig
from .validation import validate_batch_input

router = APIRouter()


def get_service() -> DetectionService:
    return build_default_service()


@router.post("/detect", response_model=DetectionResult)
def detect(snapshot: SensorSnapshot, service: DetectionService = Depends(get_service)):
    return service.run_detection(snapshot)


@router.post("/detect/batch", response_model=DetectionSummary)
def detect_batch(snapshots: List[SensorSnapshot], service: DetectionService = Depends(get_service)):
    # Validate input data
    validate_batch_input(snapshots)

    return service.run_batch(snapshots)


@router.get("/thresholds", response_model=ThresholdConfig)
def get_thresholds(service: DetectionService = Depends(get_service)):
    return service.get_thresholds()


@router.put("/thresholds", response_model=ThresholdConfig)
def put_thresholds(config: ThresholdConfig, service: DetectionService = Depends(get_service)):
    return service.update_thresholds(config)


@router.get("/health")
def health():
    return {"status": "ok"}
