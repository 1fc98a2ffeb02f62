"""Pydantic models for the prompt and test-connection endpoints.

These mirror the JSON bodies accepted and returned by the host application's
REST route (``POST /ai-agent/v1/prompt``) and its AJAX test-connection action.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Requests
# ============================================================================


class PromptRequest(BaseModel):
    """Body of a prompt submission."""

    model_config = ConfigDict(extra="ignore")

    prompt: str
    # Extra generation hints (temperature, format...). Accepted but not applied.
    args: dict[str, Any] = Field(default_factory=dict)

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class TestConnectionRequest(BaseModel):
    """Body of a test-connection action."""

    __test__ = False

    model_config = ConfigDict(extra="ignore")

    provider: str

    @field_validator("provider")
    @classmethod
    def _strip_provider(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("provider must not be empty")
        return value


# ============================================================================
# Responses
# ============================================================================


class PromptSuccessResponse(BaseModel):
    success: bool = True
    response: str


class PromptErrorResponse(BaseModel):
    success: bool = False
    error: str


class MessageData(BaseModel):
    message: str


class AjaxResponse(BaseModel):
    """``{success, data: {message}}`` envelope used by admin AJAX actions."""

    success: bool
    data: MessageData
