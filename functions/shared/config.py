"""Deploy-time configuration for the access token function.

All settings come from environment variables set on the Cloud Function.
"""
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TOKEN_URL = "https://session.voxeet.com/v1/oauth2/token"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_PROJECT_ID = "tsvet01"
DEFAULT_APP_KEY_SECRET = "comms-app-key"
DEFAULT_APP_SECRET_SECRET = "comms-app-secret"


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the function's environment."""

    token_url: str = DEFAULT_TOKEN_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    expires_in: Optional[int] = None
    project_id: str = DEFAULT_PROJECT_ID
    app_key_secret: str = DEFAULT_APP_KEY_SECRET
    app_secret_secret: str = DEFAULT_APP_SECRET_SECRET

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance

        Raises:
            ValueError: If a numeric variable is unparsable or out of range
        """
        env = os.environ if environ is None else environ

        timeout = float(
            env.get("UPSTREAM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(
                "UPSTREAM_TIMEOUT_SECONDS must be a positive finite number")

        raw_expires_in = env.get("TOKEN_EXPIRES_IN", "").strip()
        expires_in = int(raw_expires_in) if raw_expires_in else None
        if expires_in is not None and expires_in <= 0:
            raise ValueError("TOKEN_EXPIRES_IN must be a positive integer")

        return cls(
            token_url=env.get("TOKEN_URL", DEFAULT_TOKEN_URL),
            timeout_seconds=timeout,
            expires_in=expires_in,
            project_id=env.get("GOOGLE_CLOUD_PROJECT", DEFAULT_PROJECT_ID),
            app_key_secret=env.get("APP_KEY_SECRET", DEFAULT_APP_KEY_SECRET),
            app_secret_secret=env.get(
                "APP_SECRET_SECRET", DEFAULT_APP_SECRET_SECRET),
        )
