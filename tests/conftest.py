"""Shared fixtures: a scripted generative client and a throwaway profile store."""
import asyncio
import json

import pytest

from agents.dashboard_agent import DashboardAgent
from agents.simulation_agent import SimulationAgent
from core.controller import AppController
from models.profile import CommuteMode, Sensitivity, UserProfile
from services.profile_store import ProfileStore


class FakeClient:
    """Stands in for GeminiClient; records every PromptConfig it receives.

    ``responses`` items are returned in order (the last one repeats). An item
    that is an Exception is raised instead. ``delays`` (seconds) are applied
    per call, and an optional ``gate`` event holds every call until set.
    """

    def __init__(self, responses=None, delays=None, gate=None):
        self.responses = list(responses or ["{}"])
        self.delays = list(delays or [])
        self.gate = gate
        self.calls = []

    async def generate(self, config):
        index = len(self.calls)
        self.calls.append(config)
        if index < len(self.delays):
            await asyncio.sleep(self.delays[index])
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses[min(index, len(self.responses) - 1)]
        if isinstance(response, Exception):
            raise response
        return response


DASHBOARD_PAYLOAD = {
    "current": {
        "aqi": 182,
        "pm25": 96.4,
        "pm10": 171.0,
        "temp": 24.5,
        "humidity": 61,
        "condition": "Haze",
        "location": "New Delhi, India",
        "timestamp": "2026-10-17T09:30:00+05:30",
    },
    "forecast": [
        {"time": "12:00", "aqi": 190},
        {"time": "15:00", "aqi": 176},
        {"time": "18:00", "aqi": 205},
        {"time": "21:00", "aqi": 231},
    ],
    "healthRisk": "High risk for people with asthma.",
    "advisory": [
        "Wear an N95 mask outdoors.",
        "Keep windows closed during evening peaks.",
        "Run an air purifier indoors.",
    ],
    "climateInsight": "Post-monsoon stubble burning and still winds trap particulates.",
}


@pytest.fixture
def dashboard_json():
    return json.dumps(DASHBOARD_PAYLOAD)


@pytest.fixture
def profile():
    return UserProfile(
        name="Asha",
        city="New Delhi",
        sensitivity=Sensitivity.HIGH,
        commute_mode=CommuteMode.BIKE,
        health_conditions=["Asthma", "Dust Allergy"],
    )


@pytest.fixture
def store(tmp_path):
    return ProfileStore(tmp_path / "storage.json")


@pytest.fixture
def make_controller(store):
    """Build a controller wired to fake clients and a temp store."""

    def factory(dashboard_client=None, chat_client=None, api_key_ready=True):
        return AppController(
            store=store,
            dashboard_agent=DashboardAgent(dashboard_client or FakeClient()),
            simulation_agent=SimulationAgent(chat_client or FakeClient(["ok"])),
            api_key_ready=api_key_ready,
        )

    return factory
