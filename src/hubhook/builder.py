"""Fluent, immutable builder for webhook handlers.

Example:
    ```python
    from hubhook import webhook

    def on_star(payload):
        print(payload["repository"]["stargazers_count"])

    webhook("s3cr3t").on("star", on_star).listen(3000)
    ```

Every ``on`` call returns a new builder; the receiver is left untouched,
so a shared prefix can be branched into several configurations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal, overload

from pydantic import SecretStr
from starlette.requests import Request
from starlette.responses import Response

from hubhook import pipeline
from hubhook.config import Settings
from hubhook.exceptions import ValidationError
from hubhook.logging import get_logger
from hubhook.models import (
    HandlerEntry,
    HandlerResult,
    IssueCommentEvent,
    IssuesEvent,
    PingEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
    StarEvent,
    WebhookEventName,
    WorkflowRunEvent,
    is_event_name,
)

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

SecretInput = str | bytes | SecretStr | None


def _normalize_secret(secret: SecretInput) -> bytes | None:
    if isinstance(secret, SecretStr):
        secret = secret.get_secret_value()
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    if secret is not None and not isinstance(secret, bytes):
        raise ValidationError("secret", f"expected str or bytes, got {type(secret).__name__}")
    if secret is not None and len(secret) == 0:
        logger.warning("Empty webhook secret treated as no secret - signatures not verified")
        return None
    return secret


class Webhook:
    """Immutable set of webhook handlers plus the shared secret.

    Create one with :func:`webhook`, add handlers with :meth:`on`, then
    either :meth:`listen` on a port or call :meth:`handle` from an
    existing server.
    """

    __slots__ = ("_handlers", "_secret")

    def __init__(
        self,
        secret: SecretInput = None,
        handlers: tuple[HandlerEntry, ...] = (),
    ) -> None:
        self._secret = _normalize_secret(secret)
        self._handlers = tuple(handlers)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Webhook:
        """Create a builder whose secret comes from ``Settings``."""
        if settings is None:
            settings = Settings()
        return cls(settings.secret_bytes())

    @property
    def handlers(self) -> tuple[HandlerEntry, ...]:
        """Registered handlers, in registration order."""
        return self._handlers

    @property
    def has_secret(self) -> bool:
        """Whether requests are signature-verified."""
        return self._secret is not None

    def __repr__(self) -> str:
        events = [entry.event for entry in self._handlers]
        return f"Webhook(handlers={events!r}, secret={'set' if self.has_secret else 'unset'})"

    @overload
    def on(
        self, event: Literal["star"], handler: Callable[[StarEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["push"], handler: Callable[[PushEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["pull_request"], handler: Callable[[PullRequestEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["issues"], handler: Callable[[IssuesEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["issue_comment"], handler: Callable[[IssueCommentEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["ping"], handler: Callable[[PingEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["release"], handler: Callable[[ReleaseEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: Literal["workflow_run"], handler: Callable[[WorkflowRunEvent], HandlerResult]
    ) -> Webhook: ...

    @overload
    def on(
        self, event: WebhookEventName | str, handler: Callable[[Any], HandlerResult]
    ) -> Webhook: ...

    def on(
        self, event: WebhookEventName | str, handler: Callable[[Any], HandlerResult]
    ) -> Webhook:
        """Register a handler for an event and return the extended builder.

        The handler may be sync or async. If it returns a Response, later
        handlers for the same request are not called. Names GitHub added
        after this release are accepted with a warning.

        Raises:
            ValidationError: If the event name is empty or not a string, or
                the handler is not callable.
        """
        if not isinstance(event, str) or not event:
            raise ValidationError("event", f"expected a non-empty event name, got {event!r}")
        if not callable(handler):
            raise ValidationError("handler", "handler must be callable")
        if not is_event_name(event):
            logger.warning("Unrecognized webhook event name", github_event=event)

        entry = HandlerEntry(event=event, handler=handler)
        clone = object.__new__(type(self))
        clone._secret = self._secret
        clone._handlers = (*self._handlers, entry)
        return clone

    async def handle(self, request: Request) -> Response | None:
        """Run a request through the dispatch pipeline.

        Used to integrate GitHub webhook handling with an existing
        Starlette or FastAPI server. Returns None when no handler
        produced a response; the caller then supplies its own success
        response.
        """
        return await pipeline.handle(request, self._handlers, self._secret)

    def app(self, path: str = "") -> FastAPI:
        """Build the ASGI application used by :meth:`listen`."""
        from hubhook.server import create_app

        return create_app(self, path)

    def listen(self, port: int, path: str = "", host: str = "0.0.0.0") -> None:
        """Start an HTTP server and block while it serves webhooks."""
        from hubhook.server import run

        run(self, port, path, host)

    async def serve(self, port: int, path: str = "", host: str = "0.0.0.0") -> None:
        """Serve webhooks from within a running event loop."""
        from hubhook.server import serve

        await serve(self, port, path, host)


def webhook(secret: SecretInput = None) -> Webhook:
    """Start a webhook builder with no handlers.

    Without a secret, signatures are not verified and any request with
    an event header is dispatched.
    """
    return Webhook(secret)
