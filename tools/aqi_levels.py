"""AQI Level Tools

Deterministic helpers for presenting AQI values. The generative backend
supplies the numbers; these functions only classify them.

Bands follow the US EPA AQI scale used on the dashboard gauge.
"""
from typing import Dict, List, NamedTuple, Optional

from models.profile import CommuteMode


class AQICategory(NamedTuple):
    key: str
    label: str
    upper_bound: Optional[int]  # inclusive; None for the open-ended top band


AQI_CATEGORIES: List[AQICategory] = [
    AQICategory("good", "Good", 50),
    AQICategory("moderate", "Moderate", 100),
    AQICategory("sensitive", "Unhealthy for Sensitive", 150),
    AQICategory("unhealthy", "Unhealthy", 200),
    AQICategory("very_unhealthy", "Very Unhealthy", 300),
    AQICategory("hazardous", "Hazardous", None),
]

# Relative direct exposure while commuting
COMMUTE_EXPOSURE: Dict[CommuteMode, Dict[str, str]] = {
    CommuteMode.CAR: {"label": "Car (AC)", "exposure": "Lowest direct exposure"},
    CommuteMode.PUBLIC_TRANSPORT: {"label": "Public Transport", "exposure": "Moderate exposure"},
    CommuteMode.BIKE: {"label": "Bike / Motorbike", "exposure": "High exposure"},
    CommuteMode.WALK: {"label": "Walking", "exposure": "Highest exposure"},
}

HEALTH_CONDITION_OPTIONS = [
    "Heart Conditions",
    "Asthma",
    "Respiratory Issues",
    "Pregnant",
    "Elderly",
    "Children in home",
    "None",
]

GAUGE_MAX_AQI = 500


def aqi_category(aqi: Optional[int]) -> Optional[AQICategory]:
    """Classify an AQI value into its band."""
    if aqi is None:
        return None
    for category in AQI_CATEGORIES:
        if category.upper_bound is None or aqi <= category.upper_bound:
            return category
    return AQI_CATEGORIES[-1]


def gauge_fraction(aqi: Optional[int]) -> float:
    """Fill level of the AQI gauge, capped at 500."""
    if aqi is None or aqi <= 0:
        return 0.0
    return min(aqi / GAUGE_MAX_AQI, 1.0)
