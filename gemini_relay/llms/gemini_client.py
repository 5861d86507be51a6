"""Implementation of the LLMInterface using the Google Gemini REST API.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from gemini_relay.core.errors import UpstreamError
from gemini_relay.interfaces.llm_interface import LLMInterface

logger = logging.getLogger(__name__)


class GeminiClient(LLMInterface):
    """Calls the Gemini `generateContent` endpoint to provide LLM capabilities.

    Implements the LLMInterface protocol.
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-1.5-pro"
    REQUEST_TIMEOUT = 120.0

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initializes the Gemini client.

        Args:
            api_key: Gemini API key. Passed explicitly, never read from the environment here.
            model: Default model name used when `generate` is not given one.
            base_url: Root of the Gemini REST API.
            timeout: Transport timeout in seconds for each request.
            http_client: Optional pre-built AsyncClient (e.g. with a mock transport).
        """
        if not api_key:
            raise ValueError("Missing Gemini API key.")
        self.api_key = api_key
        self.default_model = model
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        logger.info(f"Gemini client initialized for model: {self.default_model}")

    async def close(self):
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
        logger.info("Gemini HTTP client closed.")

    def _endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    async def generate(self, prompt: str, model: str | None = None, **kwargs: Any) -> str:
        """Generates text for a single prompt.

        Args:
            prompt: The input prompt.
            model: The model to use (defaults to the client's model).
            **kwargs: Passed through as `generationConfig` (e.g. temperature=0.2).

        Returns:
            The generated text, with the text parts of the first candidate joined.

        Raises:
            UpstreamError: If the request fails, the API returns an error status,
                or the response carries no text.
        """
        target_model = model or self.default_model
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if kwargs:
            payload["generationConfig"] = kwargs
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        logger.debug(f"Generating text with model '{target_model}'. Prompt: '{prompt[:50]}...'")
        try:
            response = await self.http_client.post(self._endpoint(target_model), headers=headers, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_message(e.response)
            logger.error(f"Gemini API error during generation: {e.response.status_code} - {detail}")
            raise UpstreamError(detail) from e
        except httpx.RequestError as e:
            # Some httpx errors (e.g. ReadTimeout) carry an empty message
            detail = str(e) or e.__class__.__name__
            logger.error(f"Request to Gemini API failed: {detail}", exc_info=True)
            raise UpstreamError(detail) from e

        text = _extract_text(response.json())
        logger.debug(f"Generated text response (first 50 chars): '{text[:50]}...'")
        return text


def _error_message(response: httpx.Response) -> str:
    """Pulls `error.message` out of a Gemini error body, falling back to the raw text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.text or f"HTTP {response.status_code}"


def _extract_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        reason = data.get("promptFeedback", {}).get("blockReason")
        if reason:
            raise UpstreamError(f"Prompt was blocked by Gemini: {reason}")
        raise UpstreamError("Gemini returned no candidates.")

    parts = candidates[0].get("content", {}).get("parts", [])
    text = "".join(part.get("text", "") for part in parts)
    if not text:
        finish_reason = candidates[0].get("finishReason", "UNKNOWN")
        raise UpstreamError(f"Gemini returned an empty response (finishReason: {finish_reason}).")
    return text
