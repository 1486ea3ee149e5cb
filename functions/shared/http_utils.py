"""HTTP helpers for callable-style Cloud Functions.

Client SDKs invoke the function with the Firebase callable wire format:
a JSON POST of ``{"data": ...}`` answered by ``{"result": ...}`` on
success or ``{"error": {"status": ..., "message": ...}}`` on failure.
"""
from flask import jsonify
from typing import Any, Dict, Tuple

# Callable clients send Authorization alongside Content-Type
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600",
}

# Canonical callable error codes mapped to their HTTP status
CALLABLE_ERROR_STATUS = {
    "INVALID_ARGUMENT": 400,
    "UNAUTHENTICATED": 401,
    "PERMISSION_DENIED": 403,
    "NOT_FOUND": 404,
    "FAILED_PRECONDITION": 400,
    "RESOURCE_EXHAUSTED": 429,
    "INTERNAL": 500,
    "UNAVAILABLE": 503,
    "DEADLINE_EXCEEDED": 504,
}


def cors_headers() -> Dict[str, str]:
    """Return the CORS headers attached to every non-preflight response."""
    return {"Access-Control-Allow-Origin": "*"}


def handle_cors_preflight() -> Tuple[str, int, Dict[str, str]]:
    """Handle CORS preflight OPTIONS request.

    Returns:
        Empty response tuple with 204 status and full CORS headers
    """
    return ("", 204, CORS_HEADERS)


def method_not_allowed() -> Tuple[Any, int, Dict[str, str]]:
    headers = cors_headers()
    headers["Allow"] = "POST, OPTIONS"
    return (jsonify({"error": "Method not allowed"}), 405, headers)


def callable_result(result: Any) -> Tuple[Any, int, Dict[str, str]]:
    """Wrap a successful value in the callable ``result`` envelope.

    Args:
        result: JSON-serializable value returned to the caller as-is

    Returns:
        Tuple of (JSON response, 200, headers)
    """
    return (jsonify({"result": result}), 200, cors_headers())


def callable_error(
    status: str = "INTERNAL",
    message: str = "INTERNAL",
) -> Tuple[Any, int, Dict[str, str]]:
    """Build a callable ``error`` envelope.

    Args:
        status: Canonical callable error code (e.g. INTERNAL)
        message: Message shown to the caller; keep free of internals

    Returns:
        Tuple of (JSON error response, HTTP status, headers)

    Raises:
        ValueError: If status is not a known callable error code
    """
    if status not in CALLABLE_ERROR_STATUS:
        raise ValueError(f"Unknown callable error status: {status}")
    body = {"error": {"status": status, "message": message}}
    return (jsonify(body), CALLABLE_ERROR_STATUS[status], cors_headers())
