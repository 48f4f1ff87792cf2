import logging
import time
from threading import Lock
from typing import Callable, Optional

from .config import (
    BASELINE_HISTORY_WEIGHT,
    BASELINE_SAMPLE_WEIGHT,
    BASELINE_UPDATE_INTERVAL_MS,
    VOC_BASELINE_INITIAL,
)

logger = logging.getLogger(__name__)


def _uptime_clock() -> Callable[[], float]:
    """Milliseconds elapsed since the clock was created, like a sensor node's uptime counter."""
    started = time.monotonic()
    return lambda: (time.monotonic() - started) * 1000.0


class BaselineTracker:
    """
    Adaptive clean-air reference for the VOC channel.

    Keeps an exponential moving average of VOC that is refreshed at most once per
    update interval, so short excursions do not drag the reference along with them.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        initial: float = VOC_BASELINE_INITIAL,
        interval_ms: float = BASELINE_UPDATE_INTERVAL_MS,
    ) -> None:
        self._clock = clock or _uptime_clock()
        self._interval_ms = interval_ms
        self._lock = Lock()
        self.voc_baseline = initial
        self.last_update_ms = 0.0

    def update(self, current_voc: float, now_ms: Optional[float] = None) -> float:
        """Fold the sample into the baseline if the interval has elapsed; return the baseline in effect."""
        with self._lock:
            now = self._clock() if now_ms is None else now_ms
            if now - self.last_update_ms > self._interval_ms:
                self.voc_baseline = (
                    BASELINE_HISTORY_WEIGHT * self.voc_baseline
                    + BASELINE_SAMPLE_WEIGHT * current_voc
                )
                self.last_update_ms = now
                logger.debug(
                    "VOC baseline refreshed",
                    extra={"voc_baseline": round(self.voc_baseline, 4)},
                )
            return self.voc_baseline
