"""Webhook dispatch pipeline.

Takes an inbound request from signature check to handler dispatch:

1. Parse the event and signature headers
2. Reject with 403 if the event is missing, or a secret is configured
   and the signature is missing or does not match
3. Decode the body as JSON (500 on failure)
4. Call the handlers registered for the event, in registration order,
   until one returns a Response (500 if a handler raises)

Every failure is resolved to a status code here. Nothing raised by
decoding or by a handler reaches the caller.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Sequence
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from hubhook.exceptions import HandlerError, HubhookError, PayloadError
from hubhook.headers import parse_headers
from hubhook.logging import bind_context, get_logger, unbind_context
from hubhook.models import HandlerEntry, WebhookContext
from hubhook.signature import verify_signature

logger = get_logger(__name__)

FORBIDDEN = 403
INTERNAL_ERROR = 500


def _empty_response(status_code: int) -> Response:
    return Response(content=None, status_code=status_code)


def _is_authorized(context: WebhookContext, event: str, secret: bytes | None) -> bool:
    if secret is None:
        return True
    if context.signature is None:
        return False
    return verify_signature(context.signature, context.body, secret, event)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_payload(body: bytes) -> Any:
    """Decode a webhook body as UTF-8 JSON.

    Raises:
        PayloadError: If the body is not valid UTF-8, not well-formed JSON
            (NaN and Infinity included), or nested too deeply to decode.
    """
    try:
        return json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise PayloadError(f"Invalid JSON body: {e}") from e


async def _invoke(entry: HandlerEntry, payload: Any) -> Response | None:
    try:
        result = entry.handler(payload)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        raise HandlerError(entry.event, entry.name) from e

    if result is None or isinstance(result, Response):
        return result

    logger.warning(
        "Ignoring non-Response handler result",
        handler=entry.name,
        result_type=type(result).__name__,
    )
    return None


async def _run_handlers(
    event: str,
    payload: Any,
    handlers: Sequence[HandlerEntry],
) -> Response | None:
    for entry in handlers:
        if entry.event != event:
            continue
        response = await _invoke(entry, payload)
        if response is not None:
            logger.debug("Handler produced response", handler=entry.name)
            return response
    return None


async def dispatch(
    context: WebhookContext,
    handlers: Sequence[HandlerEntry],
    secret: bytes | None,
) -> Response | None:
    """Verify a webhook request and dispatch it to matching handlers.

    Args:
        context: Raw body and parsed headers of the request.
        handlers: Registered handlers, in registration order.
        secret: Shared secret, or None to skip signature verification.

    Returns:
        The first Response returned by a matching handler, an empty 403
        or 500 Response on rejection or failure, or None when no handler
        produced a response.
    """
    event = context.event
    if event is None or not _is_authorized(context, event, secret):
        return _empty_response(FORBIDDEN)

    bind_context(github_event=event)
    try:
        payload = decode_payload(context.body)
        return await _run_handlers(event, payload, handlers)
    except HubhookError as e:
        logger.exception("Webhook dispatch failed", code=e.code, error=e.message)
        return _empty_response(INTERNAL_ERROR)
    finally:
        unbind_context("github_event")


async def handle(
    request: Request,
    handlers: Sequence[HandlerEntry],
    secret: bytes | None,
) -> Response | None:
    """Read a Starlette/FastAPI request and run it through the pipeline.

    Used to integrate webhook handling with an existing ASGI server. The
    caller is responsible for method and path routing.
    """
    body = await request.body()
    event, signature = parse_headers(request.headers)
    context = WebhookContext(body=body, event=event, signature=signature)
    return await dispatch(context, handlers, secret)
