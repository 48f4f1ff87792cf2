"""Test doubles shared across suites: a controllable clock and snapshot builder."""

from core.models import SensorSnapshot


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now_ms: float = 0.0) -> None:
        self.now_ms = now_ms

    def advance(self, delta_ms: float) -> None:
        self.now_ms += delta_ms

    def __call__(self) -> float:
        return self.now_ms


# Background channels that sit outside every signature window:
# moderate particulates, dry and cool air, high gas resistance.
QUIET_CHANNELS = dict(
    iaq=100.0,
    voc=1.5,
    co2=600.0,
    temperature=22.0,
    humidity=40.0,
    raw_gas_resistance=50_000.0,
    in_spike=False,
    pm1=3.0,
    pm2_5=5.0,
    pm10=8.0,
)


def make_snapshot(**overrides) -> SensorSnapshot:
    return SensorSnapshot(**{**QUIET_CHANNELS, **overrides})
