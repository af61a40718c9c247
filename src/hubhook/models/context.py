"""Handler entries and per-request context."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from starlette.responses import Response

HandlerResult = Response | None | Awaitable[Response | None]
Handler = Callable[[Any], HandlerResult]


@dataclass(frozen=True, slots=True)
class HandlerEntry:
    """A handler bound to one event name.

    Attributes:
        event: Event name the handler is registered for.
        handler: Sync or async callable receiving the decoded payload.
    """

    event: str
    handler: Handler

    @property
    def name(self) -> str:
        """Qualified name of the handler, for diagnostics."""
        return getattr(self.handler, "__qualname__", repr(self.handler))


@dataclass(frozen=True, slots=True)
class WebhookContext:
    """Transient data for a single inbound request.

    Attributes:
        body: Raw request body, exactly as signed by GitHub.
        event: Value of the X-GitHub-Event header, if present.
        signature: Value of the X-Hub-Signature-256 header, if present.
    """

    body: bytes
    event: str | None
    signature: str | None

    def __repr__(self) -> str:
        return (
            f"WebhookContext(event={self.event!r}, "
            f"signature={'present' if self.signature else 'absent'}, "
            f"body_bytes={len(self.body)})"
        )
