"""Request/response contract for host applications embedding the dispatcher."""

from ai_connectors.protocol import models
from ai_connectors.protocol.handlers import handle_prompt_request, handle_test_connection_request

__all__ = [
    "handle_prompt_request",
    "handle_test_connection_request",
    "models",
]
