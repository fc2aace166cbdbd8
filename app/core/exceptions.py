"""Custom exceptions for the upload relay.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from RelayError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
Each class also carries the HTTP status code it is reported with.
"""

from typing import Any


class RelayError(Exception):
    """Base exception for all relay errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        status_code: HTTP status code used when the error reaches the client
        detail: Optional human-readable detail returned alongside the message
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise RelayError("Something went wrong", context={"file_path": "/tmp/v.mp4"})
        ... except RelayError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RelayError.

        Args:
            message: Error message
            detail: Optional detail for the client response
            context: Optional dictionary with additional context
        """
        self.message = message
        self.detail = detail
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "RelayError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }

    def to_response(self) -> dict[str, Any]:
        """Build the JSON body returned to the client.

        Returns:
            Dictionary with `error` and, when present, `detail`
        """
        body: dict[str, Any] = {"error": self.message}
        if self.detail:
            body["detail"] = self.detail
        return body


# ============================================
# Request Errors
# ============================================


class AuthError(RelayError):
    """Raised when the Authorization header is absent or not a Bearer token."""

    status_code = 401

    def __init__(
        self,
        message: str = "missing or malformed Authorization header",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AuthError.

        Args:
            message: Error message
            context: Additional context
        """
        super().__init__(message, context=context)


class ValidationError(RelayError):
    """Raised when the upload request body is invalid.

    Attributes:
        field: Field that failed validation (optional)
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        detail: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Error message
            field: Field that failed validation
            detail: Validation detail for the client
            context: Additional context
        """
        ctx = context or {}
        if field:
            ctx["field"] = field
        self.field = field
        super().__init__(message, detail=detail, context=ctx)


class PayloadTooLargeError(RelayError):
    """Raised when the request body exceeds the configured limit.

    Attributes:
        limit: Maximum accepted size in bytes
    """

    status_code = 413

    def __init__(self, limit: int, context: dict[str, Any] | None = None) -> None:
        """Initialize PayloadTooLargeError.

        Args:
            limit: Maximum accepted size in bytes
            context: Additional context
        """
        ctx = context or {}
        ctx["limit"] = limit
        self.limit = limit
        super().__init__("Request body too large", context=ctx)


class VideoFileNotFoundError(RelayError, FileNotFoundError):
    """Raised when filePath does not reference an existing file.

    Attributes:
        file_path: The path that was checked
    """

    status_code = 400

    def __init__(self, file_path: str, context: dict[str, Any] | None = None) -> None:
        """Initialize VideoFileNotFoundError.

        Args:
            file_path: The path that was checked
            context: Additional context
        """
        ctx = context or {}
        ctx["file_path"] = file_path
        self.file_path = file_path
        super().__init__(f"File not found: {file_path}", context=ctx)


class ProxyError(RelayError):
    """Raised when a proxy URL cannot be turned into a usable transport.

    Attributes:
        proxy_url: The rejected proxy URL
        reason: Why the URL was rejected
    """

    status_code = 400

    def __init__(
        self,
        reason: str,
        proxy_url: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ProxyError.

        Args:
            reason: Why the URL was rejected
            proxy_url: The rejected proxy URL
            context: Additional context
        """
        ctx = context or {}
        ctx["reason"] = reason
        self.reason = reason
        self.proxy_url = proxy_url
        super().__init__("Invalid proxy", detail=reason, context=ctx)


# ============================================
# Upload Errors
# ============================================


class RemoteUploadError(RelayError):
    """Raised when the YouTube upload call fails.

    The status code is chosen by a heuristic: a message mentioning "proxy"
    is reported as a client error (400), anything else as a server error
    (500). The remote API exposes no structural code for proxy failures, so
    callers must not branch on this beyond the HTTP status.

    Attributes:
        error_code: Remote HTTP status code (if applicable)
        error_reason: Error reason from the API (if applicable)
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        error_reason: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RemoteUploadError.

        Args:
            message: Most specific human-readable message found
            error_code: Remote HTTP status code
            error_reason: Error reason
            context: Additional context
        """
        ctx = context or {}
        ctx["platform"] = "youtube"
        if error_code:
            ctx["error_code"] = error_code
        if error_reason:
            ctx["error_reason"] = error_reason

        self.error_code = error_code
        self.error_reason = error_reason

        super().__init__(message, context=ctx)

    @property
    def is_proxy_failure(self) -> bool:
        """Check whether the message points at the proxy.

        Returns:
            True if the message mentions "proxy" (case-insensitive)
        """
        return "proxy" in self.message.lower()

    @property
    def status_code(self) -> int:  # type: ignore[override]
        """HTTP status code for the client response."""
        return 400 if self.is_proxy_failure else 500
