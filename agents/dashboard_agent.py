"""DashboardAgent - grounded AQI snapshot, forecast and advisory.

Pipeline: UserProfile → dashboard prompt → Gemini (with Google Search) →
fence stripping + JSON decoding → DashboardData.

Decode failures are not handled here; they propagate to the controller, which
treats them the same as a failed request.
"""
import logging

from agents.gemini_client import GeminiClient
from agents.prompt_builder import dashboard_config
from core.decoder import decode_dashboard
from core.observability import Tracer
from models.dashboard import DashboardData
from models.profile import UserProfile

logger = logging.getLogger(__name__)


class DashboardAgent:
    """Produces one complete DashboardData per call."""

    def __init__(self, client=None):
        self.client = client or GeminiClient()

    async def run(self, profile: UserProfile) -> DashboardData:
        config = dashboard_config(profile)
        with Tracer(config.metadata["kind"], profile.city):
            raw = await self.client.generate(config)
            data = decode_dashboard(raw)
        logger.info(
            f"Dashboard ready for {data.current.location or profile.city}: "
            f"AQI {data.current.aqi}, {len(data.advisory)} advisories"
        )
        return data
