"""SimulationAgent - "what-if" scenario chat.

Each reply is free text; the prior transcript is sent along so the model can
keep continuity across turns.
"""
import logging
from typing import Sequence

from agents.gemini_client import GeminiClient
from agents.prompt_builder import simulation_config
from core.decoder import decode_simulation
from core.observability import Tracer
from models.profile import UserProfile
from models.session import ChatMessage

logger = logging.getLogger(__name__)


class SimulationAgent:

    def __init__(self, client=None):
        self.client = client or GeminiClient()

    async def reply(self, profile: UserProfile, query: str,
                    history: Sequence[ChatMessage] = ()) -> str:
        config = simulation_config(profile, query, history)
        with Tracer(config.metadata["kind"], query):
            raw = await self.client.generate(config)
        return decode_simulation(raw)
