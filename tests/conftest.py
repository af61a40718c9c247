"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

from hubhook.signature import compute_signature

# Add tests directory to path so shared helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

SECRET = "s3cr3t"


@pytest.fixture(autouse=True)
def uncached_loggers():
    """Keep structlog loggers uncached so capture_logs sees every event."""
    structlog.configure(cache_logger_on_first_use=False)
    yield


@pytest.fixture
def secret() -> str:
    """Shared webhook secret used across tests."""
    return SECRET


def signed_headers(
    body: bytes,
    event: str | None = "star",
    secret: str | None = SECRET,
) -> dict[str, str]:
    """Build GitHub-style delivery headers for a body."""
    headers = {"content-type": "application/json"}
    if event is not None:
        headers["x-github-event"] = event
    if secret is not None:
        headers["x-hub-signature-256"] = compute_signature(body, secret)
    return headers


def json_body(payload: Any) -> bytes:
    """Encode a payload the way GitHub sends it."""
    return json.dumps(payload).encode("utf-8")
