"""Pydantic models for API request and response bodies.
"""

from typing import Optional

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request model for submitting a prompt to the relay.

    `prompt` is optional here so that a missing prompt is reported by the
    relay as a 400 rather than by FastAPI as a 422.
    """
    prompt: Optional[str] = Field(None, description="The user's prompt.")


class QueryResponse(BaseModel):
    """Response model carrying the reformatted answer.
    """
    response: str = Field(..., description="The model's final, reformatted answer.")


class ErrorResponse(BaseModel):
    message: str = Field(..., description="Human-readable description of the failure.")
    error: Optional[str] = Field(None, description="Detail captured from the upstream failure.")
