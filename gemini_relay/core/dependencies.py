"""Dependencies module for Gemini Relay.

This module defines FastAPI dependencies used throughout the application.
"""

import logging

from fastapi import Depends

from gemini_relay.core.config import Settings, get_settings, require_api_key
from gemini_relay.interfaces.llm_interface import LLMInterface
from gemini_relay.llms.gemini_client import GeminiClient
from gemini_relay.relay.relay_service import RelayService

logger = logging.getLogger(__name__)

# Created on first use and kept for the application lifecycle so the
# underlying httpx client can reuse connections.
_llm_service: GeminiClient | None = None


async def get_llm_service(settings: Settings = Depends(get_settings)) -> LLMInterface:
    """Provides the singleton LLMInterface instance, using injected settings."""
    global _llm_service
    # Runs on the event loop with no await before the assignment, so
    # concurrent first requests cannot each build a client.
    if _llm_service is None:
        logger.info(f"Creating GeminiClient singleton instance for model: {settings.GEMINI_MODEL}")
        _llm_service = GeminiClient(
            api_key=require_api_key(settings),
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.GEMINI_REQUEST_TIMEOUT,
        )
    return _llm_service


def get_relay_service(llm: LLMInterface = Depends(get_llm_service)) -> RelayService:
    """Provides a RelayService bound to the current LLM service."""
    return RelayService(llm=llm)


async def close_llm_service():
    """Closes and discards the LLM service singleton, if one was created."""
    global _llm_service
    if _llm_service is not None:
        await _llm_service.close()
        _llm_service = None
