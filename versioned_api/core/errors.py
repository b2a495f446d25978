"""Error Hierarchy - typed, categorized exceptions for all API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; bootstrap errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler;
      validation and unexpected failures are ApiErrors too, so one shape covers all
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ApiError base: FastAPI global handler catches all
    - ErrorContext as dataclass carrying request path, version and plugin name
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    VERSIONING = "versioning"
    CONFIGURATION = "configuration"
    STARTUP = "startup"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request context attached to an error for debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    api_version: int | None = None
    plugin: str | None = None
    debug_info: dict[str, Any] | None = None


class ApiError(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "path": self.context.path,
                    "api_version": self.context.api_version,
                },
            }
        }
        if self.details is not None:
            body["error"]["details"] = self.details
        return body


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidApiVersionError(ApiError):
    """Requested API version is malformed or not one of the valid versions."""
    def __init__(
        self,
        requested: Any,
        valid_versions: list[int],
        context: ErrorContext | None = None,
    ):
        valid = ",".join(str(v) for v in valid_versions)
        super().__init__(
            f"Invalid api-version! Valid values: {valid}",
            "INVALID_API_VERSION", ErrorCategory.VERSIONING,
            ErrorSeverity.WARNING, context, 400,
        )
        self.requested = requested
        self.valid_versions = list(valid_versions)


class RequestDataError(ApiError):
    """Path, query or header values failed validation."""
    def __init__(self, details: list[dict[str, Any]], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, details,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalServerError(ApiError):
    """An unexpected exception escaped a route; the cause is never exposed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Bootstrap Errors (500-level) ───────────────────────────────

class PluginRegistrationError(ApiError):
    """A plugin failed to register on the application."""
    def __init__(self, plugin: str, cause: Exception, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.plugin = plugin
        super().__init__(
            f"Plugin '{plugin}' failed to register: {cause}",
            "PLUGIN_REGISTRATION_FAILED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.plugin = plugin
        self.cause = cause


class ServerStartupError(ApiError):
    """The HTTP server could not be started."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Server failed to start: {message}",
            "SERVER_STARTUP_FAILED", ErrorCategory.STARTUP,
            ErrorSeverity.CRITICAL, context, 500,
        )
