"""AQI Tracker Agent Module.

Agents:
    DashboardAgent: Grounded AQI snapshot, forecast and advisory as typed data.
    SimulationAgent: Free-text "what-if" scenario replies.
    GeminiClient: The single generative backend call both agents share.
"""
from agents.gemini_client import GeminiClient
from agents.dashboard_agent import DashboardAgent
from agents.simulation_agent import SimulationAgent

__all__ = [
    "GeminiClient",
    "DashboardAgent",
    "SimulationAgent",
]
