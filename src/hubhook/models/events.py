"""GitHub webhook event names and payload shapes.

Event names are the ones GitHub documents; a handler is only eligible when its
declared event equals the ``X-GitHub-Event`` header exactly.

Payload shapes are ``TypedDict``s and exist for static typing only.
Payloads are decoded JSON and are never validated against them.
"""

from typing import Any, Literal, TypedDict, get_args

# Event names GitHub sends in the X-GitHub-Event header
WebhookEventName = Literal[
    "branch_protection_rule",
    "check_run",
    "check_suite",
    "code_scanning_alert",
    "commit_comment",
    "content_reference",
    "create",
    "delete",
    "deploy_key",
    "deployment",
    "deployment_status",
    "discussion",
    "discussion_comment",
    "fork",
    "github_app_authorization",
    "gollum",
    "installation",
    "installation_repositories",
    "issue_comment",
    "issues",
    "label",
    "marketplace_purchase",
    "member",
    "membership",
    "meta",
    "milestone",
    "org_block",
    "organization",
    "package",
    "page_build",
    "ping",
    "project",
    "project_card",
    "project_column",
    "public",
    "pull_request",
    "pull_request_review",
    "pull_request_review_comment",
    "pull_request_review_thread",
    "push",
    "release",
    "repository",
    "repository_dispatch",
    "repository_import",
    "repository_vulnerability_alert",
    "secret_scanning_alert",
    "security_advisory",
    "sponsorship",
    "star",
    "status",
    "team",
    "team_add",
    "watch",
    "workflow_dispatch",
    "workflow_job",
    "workflow_run",
]

# All event names, alphabetical
ALL_EVENT_NAMES: list[WebhookEventName] = list(get_args(WebhookEventName))

_EVENT_NAME_SET = frozenset(ALL_EVENT_NAMES)

# Decoded JSON body as handed to handlers at runtime
WebhookPayload = dict[str, Any]


def is_event_name(value: object) -> bool:
    """Check whether a value is one of the supported event names."""
    return isinstance(value, str) and value in _EVENT_NAME_SET


class User(TypedDict, total=False):
    """Account object used for senders, owners and pushers."""

    login: str
    id: int
    node_id: str
    type: str
    site_admin: bool
    html_url: str


class Repository(TypedDict, total=False):
    """Repository object included in most payloads."""

    id: int
    node_id: str
    name: str
    full_name: str
    private: bool
    owner: User
    html_url: str
    description: str | None
    fork: bool
    default_branch: str
    stargazers_count: int
    watchers_count: int
    forks_count: int
    open_issues_count: int


class Commit(TypedDict, total=False):
    """Commit entry in a push payload."""

    id: str
    tree_id: str
    distinct: bool
    message: str
    timestamp: str
    url: str
    author: dict[str, Any]
    committer: dict[str, Any]
    added: list[str]
    removed: list[str]
    modified: list[str]


class StarEvent(TypedDict, total=False):
    """Payload of the ``star`` event."""

    action: Literal["created", "deleted"]
    starred_at: str | None
    repository: Repository
    sender: User


class PushEvent(TypedDict, total=False):
    """Payload of the ``push`` event."""

    ref: str
    before: str
    after: str
    created: bool
    deleted: bool
    forced: bool
    base_ref: str | None
    compare: str
    commits: list[Commit]
    head_commit: Commit | None
    pusher: dict[str, Any]
    repository: Repository
    sender: User


class PullRequestEvent(TypedDict, total=False):
    """Payload of the ``pull_request`` event."""

    action: str
    number: int
    pull_request: dict[str, Any]
    repository: Repository
    sender: User


class IssuesEvent(TypedDict, total=False):
    """Payload of the ``issues`` event."""

    action: str
    issue: dict[str, Any]
    changes: dict[str, Any]
    repository: Repository
    sender: User


class IssueCommentEvent(TypedDict, total=False):
    """Payload of the ``issue_comment`` event."""

    action: Literal["created", "edited", "deleted"]
    issue: dict[str, Any]
    comment: dict[str, Any]
    repository: Repository
    sender: User


class PingEvent(TypedDict, total=False):
    """Payload of the ``ping`` event sent when a hook is created."""

    zen: str
    hook_id: int
    hook: dict[str, Any]
    repository: Repository
    sender: User


class ReleaseEvent(TypedDict, total=False):
    """Payload of the ``release`` event."""

    action: str
    release: dict[str, Any]
    repository: Repository
    sender: User


class WorkflowRunEvent(TypedDict, total=False):
    """Payload of the ``workflow_run`` event."""

    action: Literal["requested", "in_progress", "completed"]
    workflow_run: dict[str, Any]
    workflow: dict[str, Any]
    repository: Repository
    sender: User
