# tests/core/test_baseline.py
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.baseline import BaselineTracker
from core.config import BASELINE_UPDATE_INTERVAL_MS, VOC_BASELINE_INITIAL
from tests.helpers import FakeClock


def test_initial_state():
    tracker = BaselineTracker(clock=FakeClock())

    assert tracker.voc_baseline == VOC_BASELINE_INITIAL
    assert tracker.last_update_ms == 0.0


def test_no_update_before_interval_elapses():
    clock = FakeClock()
    tracker = BaselineTracker(clock=clock)

    clock.advance(BASELINE_UPDATE_INTERVAL_MS)  # exactly the interval is not enough
    assert tracker.update(1.9) == VOC_BASELINE_INITIAL
    assert tracker.last_update_ms == 0.0


def test_ema_after_interval():
    """New baseline is 0.8 * old + 0.2 * sample."""
    clock = FakeClock()
    tracker = BaselineTracker(clock=clock)

    clock.advance(BASELINE_UPDATE_INTERVAL_MS + 1)
    result = tracker.update(0.9)

    assert result == pytest.approx(0.8 * 0.5 + 0.2 * 0.9)
    assert tracker.last_update_ms == BASELINE_UPDATE_INTERVAL_MS + 1


def test_second_call_within_interval_is_ignored():
    clock = FakeClock()
    tracker = BaselineTracker(clock=clock)

    clock.advance(BASELINE_UPDATE_INTERVAL_MS + 1)
    first = tracker.update(0.9)

    clock.advance(60_000)
    second = tracker.update(0.0)

    assert second == first


def test_interval_is_measured_from_last_refresh():
    clock = FakeClock()
    tracker = BaselineTracker(clock=clock)

    clock.advance(BASELINE_UPDATE_INTERVAL_MS + 1)
    b1 = tracker.update(1.0)

    clock.advance(BASELINE_UPDATE_INTERVAL_MS + 1)
    b2 = tracker.update(1.0)

    assert b1 == pytest.approx(0.6)
    assert b2 == pytest.approx(0.8 * 0.6 + 0.2 * 1.0)


def test_explicit_timestamp_overrides_clock():
    tracker = BaselineTracker(clock=FakeClock())

    tracker.update(1.0, now_ms=BASELINE_UPDATE_INTERVAL_MS + 5)

    assert tracker.voc_baseline == pytest.approx(0.6)
    assert tracker.last_update_ms == BASELINE_UPDATE_INTERVAL_MS + 5


def test_concurrent_updates_refresh_once():
    """Simultaneous callers past the interval must fold in exactly one sample."""
    clock = FakeClock(BASELINE_UPDATE_INTERVAL_MS + 1)
    tracker = BaselineTracker(clock=clock)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(tracker.update, [1.0] * 32))

    assert tracker.voc_baseline == pytest.approx(0.6)


def test_default_clock_starts_at_zero_uptime():
    """A fresh tracker with the uptime clock does not refresh on its first call."""
    tracker = BaselineTracker()

    assert tracker.update(1.9) == VOC_BASELINE_INITIAL
