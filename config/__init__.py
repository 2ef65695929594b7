"""AQI Tracker Configuration Module.

This module handles LLM configuration and environment settings.

Functions:
    get_gemini_client: Return the configured Gemini client.
    build_generation_config: Per-request persona, safety and search settings.
    configure_api_key: Register a Gemini API key at runtime.
    has_api_key: Check whether a credential is available.
"""
from config.llm import get_gemini_client, build_generation_config, configure_api_key, has_api_key

__all__ = ["get_gemini_client", "build_generation_config", "configure_api_key", "has_api_key"]
