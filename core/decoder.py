"""Response Decoder - the boundary between model text and typed data.

The dashboard prompt asks Gemini for a bare JSON object, but grounded
responses cannot use ``response_mime_type`` so the model sometimes wraps the
object in a markdown fence anyway. This module strips that fence, parses the
JSON and validates it into a ``DashboardData``.

Missing optional fields get explicit defaults; anything structurally wrong
(malformed JSON, wrong types, a missing ``current`` block or AQI value)
raises ``DecodeError``.
"""
import json
import math
import re
import logging
from typing import Any, Dict, List, Optional

from core.errors import DecodeError
from models.dashboard import AQISnapshot, ForecastPoint, DashboardData

logger = logging.getLogger(__name__)

SIMULATION_PLACEHOLDER = "I couldn't generate a simulation result at this time."

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*$")

_MISSING = object()


def strip_code_fence(text: str) -> str:
    """Remove an optional leading ```json / ``` fence and a trailing ``` fence."""
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never a reading
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _get(data: Dict[str, Any], key: str) -> Any:
    value = data.get(key, _MISSING)
    return _MISSING if value is None else value


def _number(data: Dict[str, Any], key: str, path: str, default: Optional[float] = None) -> float:
    value = _get(data, key)
    if value is _MISSING:
        if default is None:
            raise DecodeError(f"missing required number '{path}'")
        return default
    if not _is_number(value):
        raise DecodeError(f"'{path}' must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as e:
        raise DecodeError(f"'{path}' is out of range") from e
    # json.loads accepts NaN, Infinity and 1e400
    if not math.isfinite(number):
        raise DecodeError(f"'{path}' must be a finite number, got {number!r}")
    return number


def _integer(data: Dict[str, Any], key: str, path: str) -> int:
    return int(round(_number(data, key, path)))


def _string(data: Dict[str, Any], key: str, path: str, default: str = "") -> str:
    value = _get(data, key)
    if value is _MISSING:
        return default
    if not isinstance(value, str):
        raise DecodeError(f"'{path}' must be a string, got {type(value).__name__}")
    return value


def _list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = _get(data, key)
    if value is _MISSING:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"'{path}' must be an array, got {type(value).__name__}")
    return value


def _snapshot(data: Any) -> AQISnapshot:
    if not isinstance(data, dict):
        raise DecodeError("'current' must be an object")
    return AQISnapshot(
        aqi=_integer(data, "aqi", "current.aqi"),
        pm25=_number(data, "pm25", "current.pm25", default=0.0),
        pm10=_number(data, "pm10", "current.pm10", default=0.0),
        temp=_number(data, "temp", "current.temp", default=0.0),
        humidity=_number(data, "humidity", "current.humidity", default=0.0),
        condition=_string(data, "condition", "current.condition", default="Unknown"),
        location=_string(data, "location", "current.location"),
        timestamp=_string(data, "timestamp", "current.timestamp"),
    )


def _forecast(items: List[Any]) -> List[ForecastPoint]:
    points = []
    for i, item in enumerate(items):
        path = f"forecast[{i}]"
        if not isinstance(item, dict):
            raise DecodeError(f"'{path}' must be an object")
        points.append(ForecastPoint(
            time=_string(item, "time", f"{path}.time"),
            aqi=_integer(item, "aqi", f"{path}.aqi"),
        ))
    return points


def _advisory(items: List[Any]) -> List[str]:
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise DecodeError(f"'advisory[{i}]' must be a string")
    return list(items)


def decode_dashboard(raw: str) -> DashboardData:
    """Parse raw model text into a validated ``DashboardData``.

    Raises:
        DecodeError: The text is not JSON or does not match the dashboard shape.
    """
    text = strip_code_fence(raw or "")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"dashboard response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError("dashboard response must be a JSON object")
    if _get(payload, "current") is _MISSING:
        raise DecodeError("dashboard response has no 'current' block")

    data = DashboardData(
        current=_snapshot(payload["current"]),
        forecast=_forecast(_list(payload, "forecast", "forecast")),
        health_risk=_string(payload, "healthRisk", "healthRisk"),
        advisory=_advisory(_list(payload, "advisory", "advisory")),
        climate_insight=_string(payload, "climateInsight", "climateInsight"),
    )
    logger.debug(f"Decoded dashboard: AQI {data.current.aqi}, {len(data.forecast)} forecast points")
    return data


def decode_simulation(raw: Optional[str]) -> str:
    """Simulation replies are free text; only blank output is replaced."""
    if raw is None or not raw.strip():
        return SIMULATION_PLACEHOLDER
    return raw
