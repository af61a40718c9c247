"""Configuration management for Hubhook.

The library never reads the environment on its own: ``webhook(secret)``
takes its secret directly. ``Settings`` is the opt-in route for services
that prefer ``HUBHOOK_*`` environment variables.
"""

import logging
import warnings
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Normalize a listener path token.

    An empty token means the root path, and a missing leading slash is added.
    """
    if not path:
        return "/"
    if not path.startswith("/"):
        return "/" + path
    return path


class Settings(BaseSettings):
    """Hubhook configuration loaded from environment variables.

    All settings can be overridden via environment variables with
    the HUBHOOK_ prefix. For example:
        HUBHOOK_SECRET=s3cr3t
        HUBHOOK_PORT=8080
        HUBHOOK_PATH=/github

    Security Notes:
        - Without HUBHOOK_SECRET, signatures are not checked and any
          request carrying an event header is dispatched
        - An empty HUBHOOK_SECRET is treated the same as an unset one
    """

    model_config = {
        "env_prefix": "HUBHOOK_",
        "extra": "ignore",
    }

    # Verification
    secret: SecretStr | None = Field(
        default=None,
        description="Shared secret configured on the GitHub webhook",
    )

    # Listener
    host: str = Field(
        default="0.0.0.0",
        description="Interface the embedded listener binds to",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the embedded listener binds to",
    )
    path: str = Field(
        default="/",
        description="Request path accepted by the embedded listener",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    @model_validator(mode="after")
    def validate_listener_settings(self) -> "Settings":
        """Normalize the listener path and flag unsigned operation."""
        object.__setattr__(self, "path", normalize_path(self.path))

        if self.secret_bytes() is None:
            warnings.warn(
                "HUBHOOK_SECRET is not set. Webhook signatures will not be verified.",
                UserWarning,
                stacklevel=2,
            )
            logger.warning("No webhook secret configured - signature verification disabled")

        return self

    def secret_bytes(self) -> bytes | None:
        """Get the secret as bytes, or None when unset or empty."""
        if self.secret is None:
            return None
        value = self.secret.get_secret_value()
        return value.encode("utf-8") if value else None
