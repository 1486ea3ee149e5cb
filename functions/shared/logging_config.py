"""Structured JSON logging for the access token function.

Log lines are single JSON objects that Cloud Logging parses into
structured entries. Credential-bearing fields are redacted before output.
"""
import logging
import json
import os
import sys
from typing import Any, Dict, Optional

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = frozenset({
    "app_key",
    "app_secret",
    "secret",
    "authorization",
    "access_token",
    "refresh_token",
})


def redact(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of fields with sensitive values masked."""
    return {
        key: REDACTED if key.lower() in SENSITIVE_FIELDS else value
        for key, value in fields.items()
    }


def resolve_level(name: str) -> Optional[int]:
    """Map a LOG_LEVEL name to a logging level, or None if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


class JSONFormatter(logging.Formatter):
    """Render log records as Cloud Logging JSON payloads."""

    def __init__(self, component: str):
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "component": self.component,
        }

        extra = getattr(record, "extra", None)
        if extra:
            log_obj.update(redact(extra))

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class CloudFunctionLogger:
    """Structured logger bound to one function component.

    Example:
        logger = CloudFunctionLogger("access-token")
        logger.info("Token issued", latency_ms=120)
        logger.error("Token exchange failed", error_type="TransportError")
    """

    def __init__(self, component: str):
        self.component = component
        self.logger = self._setup_logger()

        requested = os.environ.get("LOG_LEVEL", "INFO")
        if resolve_level(requested) is None:
            self.warning("Unknown LOG_LEVEL, using INFO", log_level=requested)

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.component)
        level = resolve_level(os.environ.get("LOG_LEVEL", "INFO"))
        logger.setLevel(logging.INFO if level is None else level)
        logger.propagate = False

        # Re-instantiation (tests, module reloads) must not stack handlers
        logger.handlers = []

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter(self.component))
        logger.addHandler(handler)

        return logger

    def _log(self, level: int, message: str, exc_info=None,
             **kwargs: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        record = self.logger.makeRecord(
            self.component, level, "", 0, message, (), exc_info
        )
        record.extra = kwargs
        self.logger.handle(record)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with structured data.

        Args:
            message: Human-readable log message
            **kwargs: Additional structured data fields
        """
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with structured data.

        Args:
            message: Human-readable error message
            **kwargs: Additional structured data fields (e.g., error_type)
        """
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error with the active exception's traceback attached."""
        self._log(logging.ERROR, message, exc_info=sys.exc_info(), **kwargs)
