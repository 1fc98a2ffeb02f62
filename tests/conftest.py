"""Pytest configuration and fixtures for all tests."""

import json
from typing import Any, Dict, List, Mapping, Optional

import pytest

from ai_connectors.core.config import InMemorySettingsStore
from ai_connectors.core.providers.transport import HttpResponse


class StubTransport:
    """Records every POST and answers with a canned response or exception."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        body: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body if body is not None else json.dumps(payload)
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def post(
        self,
        url: str,
        headers: Mapping[str, str],
        json_body: Dict[str, Any],
        timeout: float,
    ) -> HttpResponse:
        self.calls.append(
            {"url": url, "headers": dict(headers), "json": json_body, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return HttpResponse(status_code=self.status_code, body=self.body)


def openai_reply(text: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@pytest.fixture
def store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def configured_store() -> InMemorySettingsStore:
    return InMemorySettingsStore(
        {
            "ai_agent_active_model": "openai:gpt-4o",
            "ai_agent_openai_api_key": "sk-test",
        }
    )


@pytest.fixture
def ok_transport() -> StubTransport:
    return StubTransport(payload=openai_reply("Bonjour !"))
