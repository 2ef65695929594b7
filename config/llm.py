"""LLM Configuration for the Personal AQI Tracker.

This module handles Gemini credential setup, the shared ``genai.Client`` and
the per-request generation config (persona, safety settings, search tool).
"""
import logging
from typing import Optional
from google import genai
from google.genai import types
from config.settings import GOOGLE_API_KEY

logger = logging.getLogger(__name__)

# Standard safety settings for a health advisory assistant
SAFETY_SETTINGS = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]

# Google Search grounding for Gemini 2.x models
SEARCH_TOOL = types.Tool(google_search=types.GoogleSearch())

_client: Optional[genai.Client] = None


def configure_api_key(api_key: Optional[str]) -> bool:
    """Register a Gemini API key for all subsequent model calls.

    Returns:
        True if a usable key is now configured.
    """
    global _client
    api_key = (api_key or "").strip()
    if not api_key:
        return False
    _client = genai.Client(api_key=api_key)
    logger.info("Gemini API key configured.")
    return True


def has_api_key() -> bool:
    """Whether a credential is available to the client."""
    return _client is not None


def get_gemini_client() -> Optional[genai.Client]:
    """
    Returns the configured Gemini client.

    Returns:
        genai.Client instance or None if no API key is configured.
    """
    if _client is None:
        logger.warning("GOOGLE_API_KEY not set. Dashboard and simulation are unavailable.")
    return _client


def build_generation_config(system_instruction: Optional[str] = None,
                            use_search: bool = False) -> types.GenerateContentConfig:
    """Per-request settings: persona, safety settings and optional search grounding."""
    return types.GenerateContentConfig(
        system_instruction=system_instruction,
        safety_settings=SAFETY_SETTINGS,
        tools=[SEARCH_TOOL] if use_search else None,
    )


# Pick up a key from the environment at import time
if GOOGLE_API_KEY:
    configure_api_key(GOOGLE_API_KEY)
