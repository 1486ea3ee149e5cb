"""Shared infrastructure for the access token Cloud Function.

Credential loading pulls in google-cloud-secret-manager and the token
exchange pulls in httpx; import them from shared.credentials and
shared.token_exchange directly.
"""
from .config import Settings
from .logging_config import CloudFunctionLogger
from .http_utils import (
    cors_headers,
    handle_cors_preflight,
    method_not_allowed,
    callable_result,
    callable_error,
)

__all__ = [
    "Settings",
    "CloudFunctionLogger",
    "cors_headers",
    "handle_cors_preflight",
    "method_not_allowed",
    "callable_result",
    "callable_error",
]
