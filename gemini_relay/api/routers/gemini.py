"""API Router for the Gemini query relay."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from gemini_relay.api.models import ErrorResponse, QueryRequest, QueryResponse
from gemini_relay.core.dependencies import get_relay_service
from gemini_relay.core.errors import ValidationError
from gemini_relay.relay.relay_service import RelayService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Gemini"],
    responses={
        400: {"model": ErrorResponse, "description": "Prompt missing, empty or not a string"},
        500: {"model": ErrorResponse, "description": "Gemini API call failed"},
    },
)


def parse_query_request(body: Any) -> QueryRequest:
    """Reads the prompt out of an arbitrary request body.

    A missing body, or one that is not a JSON object, is treated like `{}` so
    that it gets the relay's 400 instead of FastAPI's 422.
    """
    if not isinstance(body, dict):
        logger.debug(f"Request body is {type(body).__name__}, treating as empty.")
        return QueryRequest()
    prompt = body.get("prompt")
    if prompt is not None and not isinstance(prompt, str):
        raise ValidationError("Prompt must be a string.")
    return QueryRequest(prompt=prompt)


@router.post(
    "/gemini-query",
    response_model=QueryResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": QueryRequest.model_json_schema()}},
        }
    },
)
async def gemini_query(
    body: Any = Body(None),
    relay: RelayService = Depends(get_relay_service),
) -> QueryResponse:
    """Answers the prompt with Gemini, then has Gemini reformat its own answer.

    Errors raised by the relay are rendered by the RelayError handler in main.
    """
    request = parse_query_request(body)
    final_text = await relay.relay(request.prompt)
    return QueryResponse(response=final_text)
