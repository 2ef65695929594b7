"""AQI Tracker Tools Module.

Deterministic AQI presentation helpers; the model supplies the numbers.

Tools:
    aqi_category: Classify an AQI value into its band.
    gauge_fraction: Fill level of the dashboard gauge.
    COMMUTE_EXPOSURE: Relative exposure per commute mode.
    HEALTH_CONDITION_OPTIONS: Conditions offered during onboarding.
"""
from tools.aqi_levels import (
    AQICategory,
    AQI_CATEGORIES,
    COMMUTE_EXPOSURE,
    HEALTH_CONDITION_OPTIONS,
    aqi_category,
    gauge_fraction,
)

__all__ = [
    "AQICategory",
    "AQI_CATEGORIES",
    "COMMUTE_EXPOSURE",
    "HEALTH_CONDITION_OPTIONS",
    "aqi_category",
    "gauge_fraction",
]
