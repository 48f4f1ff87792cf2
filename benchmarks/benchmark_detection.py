import time
from collections import Counter

import numpy as np

from core.models import SensorSnapshot
from core.threat_classifier import ThreatClassifier


SCENARIOS = {
    # Wide uniform sweep over plausible channel ranges
    "ambient_sweep": {
        "iaq": (20.0, 120.0),
        "voc": (0.1, 1.5),
        "temperature": (18.0, 35.0),
        "humidity": (30.0, 90.0),
        "raw_gas_resistance": (3_000.0, 80_000.0),
        "pm2_5": (0.0, 40.0),
    },
    # Concentrated around the signature windows
    "threat_band": {
        "iaq": (45.0, 80.0),
        "voc": (0.49, 0.70),
        "temperature": (27.0, 33.0),
        "humidity": (70.0, 88.0),
        "raw_gas_resistance": (5_570.0, 5_630.0),
        "pm2_5": (0.0, 35.0),
    },
}


def generate_snapshots(ranges, count, seed=7):
    """Draw uniformly distributed snapshots for each channel range."""
    rng = np.random.default_rng(seed)
    columns = {name: rng.uniform(low, high, size=count) for name, (low, high) in ranges.items()}

    snapshots = []
    for idx in range(count):
        snapshots.append(
            SensorSnapshot(
                iaq=float(columns["iaq"][idx]),
                voc=float(columns["voc"][idx]),
                co2=600.0,
                temperature=float(columns["temperature"][idx]),
                humidity=float(columns["humidity"][idx]),
                raw_gas_resistance=float(columns["raw_gas_resistance"][idx]),
                in_spike=False,
                pm1=float(columns["pm2_5"][idx]) * 0.6,
                pm2_5=float(columns["pm2_5"][idx]),
                pm10=float(columns["pm2_5"][idx]) * 1.4,
            )
        )
    return snapshots


def benchmark(snapshots):
    """
    Benchmark utility: per-call latency statistics and signature distribution.
    Returns: (mean_us, p99_us, threat_count, label_counts)
    """
    classifier = ThreatClassifier(100.0, 1.0, 1000.0, 35.0)
    latencies = np.empty(len(snapshots), dtype=float)
    labels = Counter()
    threats = 0

    for idx, snapshot in enumerate(snapshots):
        t0 = time.perf_counter()
        result = classifier.detect_snapshot(snapshot)
        latencies[idx] = time.perf_counter() - t0

        labels[result.signature.split(":")[0].split("_IAQ")[0]] += 1
        threats += int(result.is_threat)

    latencies_us = latencies * 1e6
    return float(np.mean(latencies_us)), float(np.percentile(latencies_us, 99)), threats, labels


if __name__ == "__main__":
    for label, ranges in SCENARIOS.items():
        snapshots = generate_snapshots(ranges, count=20_000)
        mean_us, p99_us, threats, labels = benchmark(snapshots)

        print(f"\n=== Benchmark Results ({label}) ===")
        print(f"  Snapshots      : {len(snapshots)}")
        print(f"  Mean latency   : {mean_us:.2f} µs")
        print(f"  p99 latency    : {p99_us:.2f} µs")
        print(f"  Threats        : {threats}")
        print("  Signatures     :")
        for name, count in labels.most_common():
            print(f"    {name:<32} {count:>6}")
