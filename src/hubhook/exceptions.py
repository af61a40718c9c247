"""Hubhook exception hierarchy.

Provides structured exceptions for error handling throughout the library.
All exceptions inherit from HubhookError for easy catching.

PayloadError and HandlerError are raised inside the dispatch pipeline and
resolved there to an HTTP status; callers of ``handle`` never see them.
"""

from __future__ import annotations


class HubhookError(Exception):
    """Base exception for all Hubhook errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "hubhook_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(HubhookError):
    """Invalid argument passed to the builder.

    Attributes:
        field: The argument that failed validation.
        message: Description of the validation failure.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class ConfigurationError(HubhookError):
    """Configuration error.

    Raised when listener arguments or settings are invalid.
    """

    code: str = "configuration_error"


class PayloadError(HubhookError):
    """Request body is not well-formed UTF-8 JSON."""

    code: str = "payload_error"


class HandlerError(HubhookError):
    """A registered handler raised while processing an event.

    Attributes:
        event: Event name the handler was registered for.
        handler_name: Qualified name of the failing handler.
    """

    code: str = "handler_error"

    def __init__(self, event: str, handler_name: str) -> None:
        self.event = event
        self.handler_name = handler_name
        super().__init__(f"Handler {handler_name} failed for event {event}")

