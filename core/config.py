"""
Configuration constants for the air-quality threat classifier.

This module contains all tunable parameters for baseline tracking and threat classification.
"""

# ============================================================================
# Baseline Tracking Configuration
# ============================================================================

# VOC baseline exponential moving average
VOC_BASELINE_INITIAL = 0.5
BASELINE_UPDATE_INTERVAL_MS = 300_000  # 5 minutes
BASELINE_HISTORY_WEIGHT = 0.8  # weight of the previous baseline
BASELINE_SAMPLE_WEIGHT = 0.2  # weight of the new VOC sample

# ============================================================================
# Gas Resistance Configuration
# ============================================================================

LOW_GAS_RESISTANCE = 10_000.0  # Ω, forces a threat on the fallback path
SUSPICIOUS_GAS_RESISTANCE = 25_000.0  # Ω

# ============================================================================
# Baseline-relative matchers
# ============================================================================

# IAQ anomaly without VOC correlate
IAQ_CLEAN_REFERENCE = 50.0
IAQ_ANOMALY_MIN_CHANGE = 8.0
IAQ_ANOMALY_MAX_VOC_CHANGE = 0.010  # ppm

# LPG carrier window and concealed-delivery deviation
LPG_RESISTANCE_MIN = 5595.0
LPG_RESISTANCE_MAX = 5605.0
LPG_VOC_DEVIATION = 0.005  # ppm

# ============================================================================
# Fallback heuristics
# ============================================================================

STEALTH_CONTAMINATION_MAX_IAQ = 65.0
STEALTH_CONTAMINATION_MAX_VOC = 1.2

MASKED_ATTACK_MAX_IAQ = 55.0
MASKED_ATTACK_MAX_VOC = 0.6

CLEAN_AIR_MAX_IAQ = 35.0
CLEAN_AIR_MAX_VOC = 0.4
CLEAN_AIR_MIN_GAS_RESISTANCE = 45_000.0  # Ω

# ============================================================================
# Candidate matchers (not part of the priority chain)
# ============================================================================

CLIMATE_RATE_LIMIT_PER_MIN = 0.08  # °C/min or %RH/min

# ============================================================================
# Operator thresholds (spike utility)
# ============================================================================

DEFAULT_IAQ_THRESHOLD = 100.0
DEFAULT_VOC_THRESHOLD = 1.0  # ppm
DEFAULT_CO2_THRESHOLD = 1000.0  # ppm
DEFAULT_PM25_THRESHOLD = 35.0  # µg/m³
