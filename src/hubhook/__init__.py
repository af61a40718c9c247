"""Hubhook: GitHub webhooks for ASGI applications.

Receives GitHub webhook deliveries, verifies their HMAC-SHA256
signature in constant time, and dispatches the decoded payload to
handlers registered per event name.

Quick Start:
    from hubhook import webhook

    async def on_star(payload):
        print(payload["repository"]["stargazers_count"])

    # Standalone listener
    webhook("s3cr3t").on("star", on_star).listen(3000)

    # Or inside an existing FastAPI app
    hook = webhook("s3cr3t").on("star", on_star)

    @app.post("/github")
    async def github(request: Request):
        return await hook.handle(request) or Response(status_code=200)
"""

__version__ = "0.1.0"

# Builder
from .builder import Webhook, webhook

# Configuration
from .config import Settings

# Exceptions
from .exceptions import (
    ConfigurationError,
    HandlerError,
    HubhookError,
    PayloadError,
    ValidationError,
)

# Logging
from .logging import (
    bind_context,
    configure_logging,
    get_logger,
    unbind_context,
)

# Models
from .models import (
    ALL_EVENT_NAMES,
    HandlerEntry,
    PullRequestEvent,
    PushEvent,
    StarEvent,
    WebhookContext,
    WebhookEventName,
    WebhookPayload,
)

# Signatures
from .signature import compute_signature, verify_signature

__all__ = [
    # Version
    "__version__",
    # Builder
    "Webhook",
    "webhook",
    # Configuration
    "Settings",
    # Exceptions
    "HubhookError",
    "ValidationError",
    "ConfigurationError",
    "PayloadError",
    "HandlerError",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    # Models
    "WebhookEventName",
    "ALL_EVENT_NAMES",
    "WebhookPayload",
    "StarEvent",
    "PushEvent",
    "PullRequestEvent",
    "HandlerEntry",
    "WebhookContext",
    # Signatures
    "compute_signature",
    "verify_signature",
]
