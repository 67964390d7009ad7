"""
errors.py - Domain-specific exceptions for keymapp_sync.

All exceptions inherit from KeymappSyncError for unified handling.
Each exception type represents a distinct failure mode. Every one of
them is terminal for a sync run.
"""

from typing import Any


class KeymappSyncError(Exception):
    """Base exception for all keymapp_sync errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class InvalidAddressError(KeymappSyncError):
    """
    Raised when a configuration-page address cannot be decoded.

    This includes strings that are not URLs and URLs whose path does
    not carry geometry, layout and revision segments.
    """

    def __init__(
        self, message: str, address: str | None = None, reason: str | None = None
    ) -> None:
        context = {}
        if address is not None:
            context["address"] = address
        if reason is not None:
            context["reason"] = reason
        super().__init__(message, context=context)
        self.address = address
        self.reason = reason


class FetchFailedError(KeymappSyncError):
    """
    Raised when a request to the remote service fails.

    Wraps transport errors (connection refused, DNS, timeouts) and
    non-success HTTP status codes.
    """

    def __init__(
        self, message: str, url: str | None = None, status_code: int | None = None
    ) -> None:
        context = {}
        if url is not None:
            context["url"] = url
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, context=context)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(KeymappSyncError):
    """
    Raised when the remote response cannot be decoded.

    Either the body is not a JSON object with a Data member, or the
    revision hash id is missing from it.
    """

    def __init__(
        self, message: str, url: str | None = None, field: str | None = None
    ) -> None:
        context = {}
        if url is not None:
            context["url"] = url
        if field is not None:
            context["field"] = field
        super().__init__(message, context=context)
        self.url = url
        self.field = field


class StoreError(KeymappSyncError):
    """
    Raised when a local store operation fails.

    This wraps SQLite errors with additional context about
    what operation was being attempted.
    """

    def __init__(
        self, message: str, operation: str | None = None, sql: str | None = None
    ) -> None:
        context = {}
        if operation is not None:
            context["operation"] = operation
        if sql is not None:
            # Truncate long SQL for readability
            context["sql"] = sql[:200] + "..." if len(sql) > 200 else sql
        super().__init__(message, context=context)
        self.operation = operation
        self.sql = sql
