"""Prompt Builder - persona and request prompts for the AQI Tracker.

Two request kinds share one fixed system instruction:

* Dashboard snapshot: grounded in live Google Search results and answered as a
  single JSON object with an exact field schema.
* Simulation query: a short user-context line plus the free-text question,
  sent after the prior chat turns and answered in natural language.

Everything here is a pure function of its inputs.
"""
from typing import Any, Dict, List, Sequence, Union
from dataclasses import dataclass, field

from models.profile import UserProfile
from models.session import ChatMessage

SYSTEM_INSTRUCTION = """
You are the Personal AQI Tracker, an AI-powered assistant dedicated to monitoring, analyzing, predicting, and advising on Air Quality Index (AQI).
Your focus is raising awareness about hazardous levels in India and their links to climate change.
You function as a coordinated multi-agent system (Data, Analysis, Advisory, Simulation, Memory).

**Goals:**
1. Raise awareness of AQI hazards (India focus).
2. Provide tailored preventive recommendations based on user habits and health.
3. Track exposure and predict trends using climate data.
4. Run "what-if" simulations.

**Response Rules:**
- Be scientific but accessible.
- Emphasize climate change links (e.g., heatwaves -> ozone).
- Use metric units.
- Focus on Indian context (seasonal stubble burning, Diwali, monsoon effects).
"""

DASHBOARD_SCHEMA = """{
  "current": {
    "aqi": number,
    "pm25": number,
    "pm10": number,
    "temp": number,
    "humidity": number,
    "condition": string, // e.g. "Haze", "Clear"
    "location": string,
    "timestamp": string // ISO format
  },
  "forecast": [
    { "time": string, "aqi": number } // array of forecast points
  ],
  "healthRisk": string,
  "advisory": [string], // array of strings
  "climateInsight": string
}"""

Contents = Union[str, List[Dict[str, Any]]]


@dataclass
class PromptConfig:
    """Everything one generation call needs."""
    contents: Contents
    system_instruction: str = SYSTEM_INSTRUCTION
    use_search: bool = True
    allow_empty: bool = False  # blank text is returned instead of raising
    metadata: Dict[str, Any] = field(default_factory=dict)


def build_dashboard_prompt(profile: UserProfile) -> str:
    conditions = ", ".join(profile.health_conditions)
    return f"""
Generate a realistic dashboard status for location: {profile.city}.
User Profile: Sensitivity: {profile.sensitivity.value}, Health: {conditions}, Commute: {profile.commute_mode.value}.

Fetch real-time AQI and weather data for the location using Google Search.
Then, estimate a 24h forecast curve based on trends.
Provide actionable advice specific to this user.
Include a climate insight relevant to the current season in India.

**IMPORTANT**: You must return a strictly valid JSON object. Do not wrap it in markdown code blocks.
The JSON must match this structure:
{DASHBOARD_SCHEMA}
"""


def build_simulation_prompt(profile: UserProfile, query: str) -> str:
    user_context = f"User Context: {profile.city}, {profile.sensitivity.value} sensitivity."
    return f"{user_context}\nUser Query: {query}"


def history_to_contents(history: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Prior turns as Gemini content entries, oldest first."""
    return [{"role": msg.role.value, "parts": [{"text": msg.text}]} for msg in history]


def build_simulation_contents(profile: UserProfile, query: str,
                              history: Sequence[ChatMessage] = ()) -> List[Dict[str, Any]]:
    contents = history_to_contents(history)
    contents.append({"role": "user", "parts": [{"text": build_simulation_prompt(profile, query)}]})
    return contents


def dashboard_config(profile: UserProfile) -> PromptConfig:
    return PromptConfig(
        contents=build_dashboard_prompt(profile),
        metadata={"kind": "dashboard", "city": profile.city},
    )


def simulation_config(profile: UserProfile, query: str,
                      history: Sequence[ChatMessage] = ()) -> PromptConfig:
    return PromptConfig(
        contents=build_simulation_contents(profile, query, history),
        allow_empty=True,
        metadata={"kind": "simulation", "turns": len(history)},
    )
