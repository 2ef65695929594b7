"""Presentation helpers - pure renderers of already-validated data.

Turns controller state into the Markdown and chat payloads the Gradio app
displays. Nothing here calls the model or mutates state.
"""
from datetime import datetime
from typing import Dict, List, Optional

from models.dashboard import DashboardData
from models.profile import UserProfile
from models.session import ChatMessage, ChatRole
from tools.aqi_levels import COMMUTE_EXPOSURE, aqi_category, gauge_fraction

GAUGE_WIDTH = 20


def _fmt(val, suffix=""):
    return f"{val:g}{suffix}" if val is not None else "N/A"


def _clock(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%H:%M")
    except ValueError:
        return timestamp or "unknown"


def render_gauge(aqi: int) -> str:
    filled = round(gauge_fraction(aqi) * GAUGE_WIDTH)
    category = aqi_category(aqi)
    return f"`{'█' * filled}{'░' * (GAUGE_WIDTH - filled)}` **{aqi}** AQI · {category.label}"


def render_dashboard(data: Optional[DashboardData], loading: bool,
                     profile: Optional[UserProfile]) -> str:
    if loading:
        return "⏳ Analyzing atmospheric data..."
    if data is None:
        city = profile.city if profile else "your city"
        return (
            f"### No data available for {city}\n"
            "We couldn't load air quality data. Press **Refresh** to try again."
        )

    current = data.current
    lines = [
        f"## {current.location or (profile.city if profile else '')}",
        f"Last updated: {_clock(current.timestamp)} · {current.condition}",
        "",
        render_gauge(current.aqi),
        "",
        "| Temp | Humidity | PM2.5 | PM10 |",
        "|---|---|---|---|",
        f"| {_fmt(current.temp, '°C')} | {_fmt(current.humidity, '%')} "
        f"| {_fmt(current.pm25, ' µg/m³')} | {_fmt(current.pm10, ' µg/m³')} |",
        "",
        "### Health Risk",
        data.health_risk or "No assessment available.",
    ]
    if data.advisory:
        lines += ["", "### Advisory"] + [f"- {item}" for item in data.advisory]
    if data.forecast:
        lines += ["", "### 24h Forecast", "| Time | AQI | Level |", "|---|---|---|"]
        lines += [
            f"| {p.time} | {p.aqi} | {aqi_category(p.aqi).label} |" for p in data.forecast
        ]
    if data.climate_insight:
        lines += ["", "### 🌍 Climate Context", data.climate_insight]
    return "\n".join(lines)


def render_profile_summary(profile: Optional[UserProfile]) -> str:
    if profile is None:
        return ""
    commute = COMMUTE_EXPOSURE[profile.commute_mode]
    conditions = ", ".join(profile.health_conditions) or "None"
    return (
        f"**{profile.name}** · {profile.city} · {profile.sensitivity.value} sensitivity\n\n"
        f"Commute: {commute['label']} ({commute['exposure']}) · Health: {conditions}"
    )


def render_transcript(messages: List[ChatMessage]) -> List[Dict[str, str]]:
    """Chat transcript in Gradio's ``messages`` format."""
    return [
        {
            "role": "user" if m.role is ChatRole.USER else "assistant",
            "content": m.text,
        }
        for m in messages
    ]


def render_metrics_footer(summary: Dict[str, Dict[str, int]]) -> str:
    """One line per request kind: successes, failures and average latency."""
    parts = []
    for kind, stats in sorted(summary.items()):
        part = (
            f"{kind.capitalize()}: {stats['successes']}/{stats['requests']} ok, "
            f"avg {stats['avg_latency_ms']}ms"
        )
        failed = stats["generation_failures"] + stats["unexpected_failures"]
        if failed:
            part += f", {failed} failed"
        if stats["decode_failures"]:
            part += f", {stats['decode_failures']} unreadable"
        parts.append(part)
    return f"<sub>{' · '.join(parts)}</sub>" if parts else ""
