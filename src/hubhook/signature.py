"""HMAC-SHA256 signature computation and timing-safe verification.

GitHub signs the raw request body with the webhook secret and sends
``sha256=<hex digest>`` in the X-Hub-Signature-256 header.
"""

from __future__ import annotations

import hashlib
import hmac

from hubhook.logging import get_logger

logger = get_logger(__name__)

SIGNATURE_PREFIX = "sha256="


def _to_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def compute_signature(body: bytes | str, secret: bytes | str) -> str:
    """Compute the HMAC-SHA256 signature for a webhook body.

    Args:
        body: Raw request body that was signed.
        secret: Shared webhook secret.

    Returns:
        Signature in format "sha256=<hex_digest>".
    """
    digest = hmac.new(
        key=_to_bytes(secret),
        msg=_to_bytes(body),
        digestmod=hashlib.sha256,
    ).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(
    signature: str,
    body: bytes | str,
    secret: bytes | str,
    event: str,
) -> bool:
    """Verify a webhook signature in constant time.

    Signatures whose length differs from the expected one fail without
    reaching the comparator. Content comparison uses
    ``hmac.compare_digest`` so timing does not depend on where the
    values first differ.

    Args:
        signature: Value of the X-Hub-Signature-256 header.
        body: Raw request body.
        secret: Shared webhook secret.
        event: Event name, used only to tag the diagnostic.

    Returns:
        True if the signature matches, False otherwise.
    """
    expected = compute_signature(body, secret).encode("ascii")
    supplied = signature.encode("utf-8", errors="replace")

    if len(supplied) != len(expected) or not hmac.compare_digest(expected, supplied):
        logger.warning("Signature verification failed", github_event=event)
        return False

    logger.info("Signature verified", github_event=event)
    return True
