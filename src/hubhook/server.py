"""Embedded HTTP listener for webhook handling.

A FastAPI application with a single catch-all route: POST to the
configured path goes through the dispatch pipeline, every other
method or path gets an empty 404. Served with uvicorn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI, Request
from starlette.responses import Response

from hubhook.config import Settings, normalize_path
from hubhook.exceptions import ConfigurationError
from hubhook.logging import configure_logging, get_logger

if TYPE_CHECKING:
    from hubhook.builder import Webhook

logger = get_logger(__name__)


def create_app(webhook: Webhook, path: str = "") -> FastAPI:
    """Create the listener application for a webhook builder.

    Args:
        webhook: Builder whose handlers and secret are used.
        path: Request path to accept. Empty means "/".

    Returns:
        FastAPI application, mountable under any ASGI server.
    """
    pathname = normalize_path(path)

    app = FastAPI(
        title="Hubhook",
        description="GitHub webhook listener",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    async def receive(request: Request) -> Response:
        """Route POSTs on the webhook path to the pipeline, 404 otherwise."""
        if request.method != "POST" or request.url.path != pathname:
            return Response(status_code=404)

        response = await webhook.handle(request)
        if response is None:
            return Response(status_code=200)
        return response

    # Starlette route without a method list, so every method reaches receive()
    app.add_route("/{_rest:path}", receive, include_in_schema=False)

    return app


def _check_port(port: int) -> None:
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"Port must be between 1 and 65535, got {port}")


def run(webhook: Webhook, port: int, path: str = "", host: str = "0.0.0.0") -> None:
    """Serve webhooks on ``host:port`` until interrupted.

    Raises:
        ConfigurationError: If the port is out of range.
    """
    _check_port(port)
    app = create_app(webhook, path)
    logger.info("Listening for webhooks", host=host, port=port, path=normalize_path(path))
    uvicorn.run(app, host=host, port=port)


async def serve(webhook: Webhook, port: int, path: str = "", host: str = "0.0.0.0") -> None:
    """Serve webhooks from within a running event loop.

    Raises:
        ConfigurationError: If the port is out of range.
    """
    _check_port(port)
    app = create_app(webhook, path)
    config = uvicorn.Config(app, host=host, port=port)
    logger.info("Listening for webhooks", host=host, port=port, path=normalize_path(path))
    await uvicorn.Server(config).serve()


def run_from_settings(webhook: Webhook, settings: Settings | None = None) -> None:
    """Configure logging and serve webhooks as described by ``Settings``.

    Example:
        ```python
        from hubhook import Webhook
        from hubhook.server import run_from_settings

        hook = Webhook.from_settings().on("push", on_push)
        run_from_settings(hook)  # HUBHOOK_HOST, HUBHOOK_PORT, HUBHOOK_PATH
        ```
    """
    if settings is None:
        settings = Settings()

    configure_logging(level=settings.log_level, format=settings.log_format)
    run(webhook, settings.port, settings.path, settings.host)
