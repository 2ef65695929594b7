from typing import List
from dataclasses import dataclass, field


@dataclass
class AQISnapshot:
    """Current conditions as reported by the generative backend."""
    aqi: int
    pm25: float = 0.0
    pm10: float = 0.0
    temp: float = 0.0         # °C
    humidity: float = 0.0     # %
    condition: str = "Unknown"
    location: str = ""
    timestamp: str = ""       # ISO-8601


@dataclass
class ForecastPoint:
    time: str
    aqi: int


@dataclass
class DashboardData:
    """One complete dashboard payload. Replaced wholesale, never patched."""
    current: AQISnapshot
    forecast: List[ForecastPoint] = field(default_factory=list)  # model order is authoritative
    health_risk: str = ""
    advisory: List[str] = field(default_factory=list)
    climate_insight: str = ""
