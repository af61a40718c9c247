"""Extraction of the GitHub event and signature headers.

Absent headers are reported through the log and returned as None.
Whether that rejects the request is decided by the dispatch pipeline.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

from starlette.datastructures import Headers

from hubhook.logging import get_logger

logger = get_logger(__name__)

EVENT_HEADER = "x-github-event"
SIGNATURE_HEADER = "x-hub-signature-256"


class ParsedHeaders(NamedTuple):
    """Event name and signature tokens of a webhook request."""

    event: str | None
    signature: str | None


def _lookup(headers: Mapping[str, str], name: str) -> str | None:
    if isinstance(headers, Headers):
        value = headers.get(name)
    else:
        value = next((v for k, v in headers.items() if k.lower() == name), None)
    return value or None


def parse_headers(headers: Mapping[str, str]) -> ParsedHeaders:
    """Parse GitHub webhook request headers.

    Args:
        headers: Request headers. Starlette ``Headers`` or any mapping;
            names are matched case-insensitively.

    Returns:
        ParsedHeaders with the event name and signature, each None if absent.
    """
    event = _lookup(headers, EVENT_HEADER)
    signature = _lookup(headers, SIGNATURE_HEADER)

    if event is None:
        logger.warning("Webhook header not found", header=EVENT_HEADER)
    if signature is None:
        logger.warning("Webhook header not found", header=SIGNATURE_HEADER)

    return ParsedHeaders(event=event, signature=signature)
