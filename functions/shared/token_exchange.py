"""Client-credentials exchange against the communications token endpoint.

One call, one POST: the application key/secret go out as HTTP Basic auth
with ``grant_type=client_credentials`` and the parsed JSON body comes back
untouched. Nothing is retried or cached.
"""
import base64
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .credentials import Credentials

GRANT_TYPE = "client_credentials"


class TokenExchangeError(Exception):
    """Base class for failed token exchanges."""


class TransportError(TokenExchangeError):
    """The upstream could not be reached (DNS, connect, TLS, timeout)."""


class PayloadError(TokenExchangeError):
    """The upstream body was not valid JSON."""


class UpstreamRejectedError(TokenExchangeError):
    """The upstream answered with an HTTP error status."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"Upstream rejected token request: "
                         f"HTTP {status_code} ({reason})")
        self.status_code = status_code
        self.reason = reason


def basic_auth_header(credentials: Credentials) -> str:
    """Build the ``Authorization`` value for the key/secret pair."""
    raw = f"{credentials.key}:{credentials.secret}".encode("UTF-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def build_form(expires_in: Optional[int] = None) -> Dict[str, str]:
    form = {"grant_type": GRANT_TYPE}
    if expires_in is not None:
        form["expires_in"] = str(expires_in)
    return form


def _rejection_reason(response: httpx.Response) -> str:
    try:
        error_data = response.json() if response.content else {}
    except ValueError:
        return f"HTTP {response.status_code}"
    if not isinstance(error_data, dict):
        return f"HTTP {response.status_code}"
    return str(error_data.get("error_description")
               or error_data.get("error")
               or f"HTTP {response.status_code}")


def exchange_client_credentials(
    credentials: Credentials,
    settings: Optional[Settings] = None,
) -> Any:
    """Exchange the application credentials for an access token.

    Args:
        credentials: Application key and secret
        settings: Upstream URL, timeout and optional token lifetime

    Returns:
        The upstream JSON body, unmodified

    Raises:
        TransportError: If the request could not complete
        UpstreamRejectedError: If the upstream returned HTTP >= 400
        PayloadError: If the body is not valid JSON
    """
    settings = settings or Settings.from_env()

    headers = {
        "Authorization": basic_auth_header(credentials),
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }

    try:
        with httpx.Client(timeout=settings.timeout_seconds) as client:
            response = client.post(
                settings.token_url,
                headers=headers,
                data=build_form(settings.expires_in),
            )
    except httpx.HTTPError as e:
        raise TransportError(str(e) or type(e).__name__) from e

    if response.status_code >= 400:
        raise UpstreamRejectedError(
            response.status_code, _rejection_reason(response))

    try:
        return response.json()
    except ValueError as e:
        raise PayloadError(f"Upstream returned a non-JSON body: {e}") from e
