"""Application key/secret loading for the token exchange.

Credentials come from the APP_KEY/APP_SECRET environment variables when
both are set, otherwise from Secret Manager. Once loaded they are cached
for the lifetime of the instance.
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from google.cloud import secretmanager

from .config import Settings
from .logging_config import CloudFunctionLogger

logger = CloudFunctionLogger("credentials")

_credentials = None


class CredentialsError(Exception):
    """Raised when no usable application key/secret is configured."""


@dataclass(frozen=True)
class Credentials:
    key: str
    secret: str = field(repr=False)


def _access_secret(client, project_id: str, name: str) -> str:
    path = f"projects/{project_id}/secrets/{name}/versions/latest"
    response = client.access_secret_version(request={"name": path})
    return response.payload.data.decode("UTF-8").strip()


def _load_from_secret_manager(settings: Settings) -> Optional[Credentials]:
    """Read the key and secret from Secret Manager.

    Returns:
        Credentials, or None if either secret cannot be read.
    """
    try:
        client = secretmanager.SecretManagerServiceClient()
        key = _access_secret(client, settings.project_id,
                             settings.app_key_secret)
        secret = _access_secret(client, settings.project_id,
                                settings.app_secret_secret)
    except Exception as e:
        logger.error("Failed to load app credentials from Secret Manager",
                     error=str(e), project_id=settings.project_id)
        return None
    return Credentials(key=key, secret=secret)


def get_credentials(settings: Optional[Settings] = None) -> Credentials:
    """Return the application credentials, loading them on first use.

    Args:
        settings: Settings used for Secret Manager lookups

    Returns:
        Credentials with non-empty key and secret

    Raises:
        CredentialsError: If neither source yields a key and secret
    """
    global _credentials

    if _credentials is not None:
        return _credentials

    key = os.environ.get("APP_KEY", "").strip()
    secret = os.environ.get("APP_SECRET", "").strip()
    if key and secret:
        credentials = Credentials(key=key, secret=secret)
    else:
        credentials = _load_from_secret_manager(settings or Settings.from_env())

    if credentials is None or not credentials.key or not credentials.secret:
        raise CredentialsError("Application key and secret are not configured")

    _credentials = credentials
    return _credentials


def reset_credentials():
    """Clear the cached credentials (for testing)."""
    global _credentials
    _credentials = None
