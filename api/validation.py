from typing import List
from fastapi import HTTPException

from core.models import SensorSnapshot


def validate_batch_input(snapshots: List[SensorSnapshot]) -> None:
    """Guardrail around batch replay: reject empty payloads early."""
    if not snapshots:
        raise HTTPException(
            status_code=422,
            detail="Batch cannot be empty. Please provide at least one sensor snapshot."
        )
