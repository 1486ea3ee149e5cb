"""
Access Token Cloud Function

Exchanges the application key/secret for a short-lived communications
access token so mobile and web clients can initialize the SDK without
shipping long-lived secrets. Speaks the Firebase callable protocol.
"""
import time

import functions_framework
from flask import Request

from shared.config import Settings
from shared.credentials import CredentialsError, get_credentials
from shared.http_utils import (
    callable_error,
    callable_result,
    handle_cors_preflight,
    method_not_allowed,
)
from shared.logging_config import CloudFunctionLogger
from shared.token_exchange import TokenExchangeError, exchange_client_credentials

logger = CloudFunctionLogger("access-token")


@functions_framework.http
def get_access_token(request: Request):
    """
    HTTP endpoint returning a fresh access token.

    POST /get_access_token
    Body: {"data": ...} (ignored)

    Returns:
        200: {"result": {"access_token": "...", "expires_in": 3600, ...}}
        405: {"error": "Method not allowed"}
        500: {"error": {"status": "INTERNAL", "message": "INTERNAL"}}
    """
    if request.method == "OPTIONS":
        return handle_cors_preflight()

    if request.method != "POST":
        return method_not_allowed()

    started = time.monotonic()
    try:
        settings = Settings.from_env()
        credentials = get_credentials(settings)
        token = exchange_client_credentials(credentials, settings)
    except CredentialsError as e:
        logger.error("Access token unavailable", error_type=type(e).__name__,
                     error=str(e))
        return callable_error()
    except TokenExchangeError as e:
        logger.error("Token exchange failed", error_type=type(e).__name__,
                     error=str(e),
                     status_code=getattr(e, "status_code", None))
        return callable_error()
    except Exception as e:
        logger.exception("Unexpected error issuing access token",
                         error_type=type(e).__name__, error=str(e))
        return callable_error()

    logger.info(
        "Access token issued",
        latency_ms=int((time.monotonic() - started) * 1000),
        expires_in=token.get("expires_in") if isinstance(token, dict) else None,
    )
    return callable_result(token)
