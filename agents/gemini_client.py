"""Generative Client - one awaited Gemini call per request.

No retries, no streaming and no timeout beyond the SDK default: every retry in
this app is user-initiated.
"""
import logging

from config.llm import build_generation_config, get_gemini_client
from config.settings import GEMINI_MODEL_NAME
from core.errors import GenerationError, MissingCredentialError
from agents.prompt_builder import PromptConfig

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends a PromptConfig to Gemini and returns the raw response text."""

    def __init__(self, model_name: str = GEMINI_MODEL_NAME):
        self.model_name = model_name

    async def generate(self, config: PromptConfig) -> str:
        client = get_gemini_client()
        if client is None:
            raise MissingCredentialError("No Gemini API key configured")

        generation_config = build_generation_config(
            system_instruction=config.system_instruction,
            use_search=config.use_search,
        )

        logger.info(f"Calling {self.model_name} (search={config.use_search}, {config.metadata})")
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=config.contents,
                config=generation_config,
            )
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        # None when the candidate was blocked or carries no text parts
        text = response.text or ""
        if not config.allow_empty and not text.strip():
            raise GenerationError("Gemini returned an empty response")
        return text
