"""Hubhook data models.

Exports:
    - WebhookEventName, ALL_EVENT_NAMES, is_event_name: the known event names
    - Payload TypedDicts: StarEvent, PushEvent, PullRequestEvent, ...
    - HandlerEntry, WebhookContext: registry entries and request context
"""

from .context import Handler, HandlerEntry, HandlerResult, WebhookContext
from .events import (
    ALL_EVENT_NAMES,
    Commit,
    IssueCommentEvent,
    IssuesEvent,
    PingEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
    Repository,
    StarEvent,
    User,
    WebhookEventName,
    WebhookPayload,
    WorkflowRunEvent,
    is_event_name,
)

__all__ = [
    # Event names
    "WebhookEventName",
    "ALL_EVENT_NAMES",
    "is_event_name",
    # Payloads
    "WebhookPayload",
    "User",
    "Repository",
    "Commit",
    "StarEvent",
    "PushEvent",
    "PullRequestEvent",
    "IssuesEvent",
    "IssueCommentEvent",
    "PingEvent",
    "ReleaseEvent",
    "WorkflowRunEvent",
    # Registry and request context
    "Handler",
    "HandlerResult",
    "HandlerEntry",
    "WebhookContext",
]
