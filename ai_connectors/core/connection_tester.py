"""Validate a provider's API key with a short live request."""

from __future__ import annotations

from dataclasses import dataclass

from ai_connectors.core.dispatcher import RequestDispatcher
from ai_connectors.utils.log import get_logger

logger = get_logger()

TEST_PROMPT = "Say hello in French."
TEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class ConnectionTestResult:
    success: bool
    message: str


class ConnectionTester:
    """Send ``TEST_PROMPT`` to a provider's first catalog model."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    def test_connection(self, provider_id: str) -> ConnectionTestResult:
        provider = self.dispatcher.providers.get(provider_id) if provider_id else None
        if provider is None:
            return ConnectionTestResult(False, f"invalid provider: {provider_id}")

        if not self.dispatcher.api_key_for(provider):
            return ConnectionTestResult(False, f"no API key configured for {provider.name}")

        model_id = provider.first_model_id()
        if model_id is None:
            return ConnectionTestResult(False, f"no model available for {provider.name}")

        logger.info(
            "[connection_tester] Testing provider",
            extra={"provider": provider_id, "model": model_id},
        )
        result = self.dispatcher.dispatch(
            TEST_PROMPT, provider_id, model_id, timeout=TEST_TIMEOUT
        )
        if result.success:
            return ConnectionTestResult(True, f"connection to {provider.name} succeeded")
        return ConnectionTestResult(False, f"connection to {provider.name} failed: {result.error}")


__all__ = ["ConnectionTestResult", "ConnectionTester", "TEST_PROMPT", "TEST_TIMEOUT"]
