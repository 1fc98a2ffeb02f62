"""Framework-agnostic handlers for the prompt endpoint and test-connection action.

Each handler takes the decoded JSON body (any JSON value) and returns
``(status_code, body)``. Anything other than a matching object is a 400.
Authentication, nonces and routing belong to the host application.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import ValidationError

from ai_connectors.core.connection_tester import ConnectionTester
from ai_connectors.core.dispatcher import RequestDispatcher
from ai_connectors.protocol.models import (
    AjaxResponse,
    MessageData,
    PromptErrorResponse,
    PromptRequest,
    PromptSuccessResponse,
    TestConnectionRequest,
)
from ai_connectors.utils.log import get_logger

logger = get_logger()

HandlerResult = Tuple[int, Dict[str, Any]]


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"invalid request: {location}: {first.get('msg', 'invalid value')}"


def handle_prompt_request(payload: Any, dispatcher: RequestDispatcher) -> HandlerResult:
    """Pass a prompt through the dispatcher: 200 on success, 500 on failure."""
    try:
        request = PromptRequest.model_validate(payload)
    except ValidationError as exc:
        return 400, PromptErrorResponse(error=_validation_message(exc)).model_dump()

    if request.args:
        logger.debug("[protocol] Ignoring prompt args", extra={"arg_names": sorted(request.args)})

    result = dispatcher.send_prompt(request.prompt)
    if result.success:
        return 200, PromptSuccessResponse(response=result.response).model_dump()
    return 500, PromptErrorResponse(error=result.error or "unknown error").model_dump()


def handle_test_connection_request(
    payload: Any, tester: ConnectionTester
) -> HandlerResult:
    """Run a connection test and wrap it in the AJAX envelope."""
    try:
        request = TestConnectionRequest.model_validate(payload)
    except ValidationError as exc:
        body = AjaxResponse(success=False, data=MessageData(message=_validation_message(exc)))
        return 400, body.model_dump()

    outcome = tester.test_connection(request.provider)
    body = AjaxResponse(success=outcome.success, data=MessageData(message=outcome.message))
    return 200, body.model_dump()


__all__ = ["handle_prompt_request", "handle_test_connection_request"]
