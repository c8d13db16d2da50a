"""
Custom exception hierarchy.

Defines every exception raised by the package and helpers for consistent
error reporting.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from shopify_orders.domain.models.user_error import UserError

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes.
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    SHOPIFY_API_ERROR = "SHOPIFY_API_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    BULK_OPERATION_FAILED = "BULK_OPERATION_FAILED"
    BULK_OPERATION_TIMEOUT = "BULK_OPERATION_TIMEOUT"

    ORDER_OPERATION_FAILED = "ORDER_OPERATION_FAILED"
    ORDER_USER_ERRORS = "ORDER_USER_ERRORS"
    DOCUMENT_BUILD_ERROR = "DOCUMENT_BUILD_ERROR"


class ErrorSeverity(Enum):
    """
    Error severity levels.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base exception for every custom exception in the package.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardized error code
            details: Additional error information
            severity: Error severity
            is_retryable: Whether the operation may be retried
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Exception representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return self.message


class ShopifyAPIException(AppException):
    """
    Transport or GraphQL-level failure talking to the Shopify API.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        rate_limited: bool = False,
        retry_after: Optional[float] = None,
        **kwargs,
    ):
        """
        Initialize the Shopify API exception.

        Args:
            message: Error message
            api_response_code: HTTP status returned by Shopify
            rate_limited: Whether the failure was caused by rate limiting
            retry_after: Seconds suggested by Shopify before retrying
            **kwargs: Extra arguments for AppException
        """
        error_code = ErrorCode.SHOPIFY_API_ERROR
        severity = ErrorSeverity.MEDIUM

        if rate_limited:
            error_code = ErrorCode.RATE_LIMIT_EXCEEDED
            severity = ErrorSeverity.LOW
        elif api_response_code and api_response_code >= 500:
            severity = ErrorSeverity.HIGH

        super().__init__(
            message=message,
            error_code=error_code,
            severity=severity,
            is_retryable=True,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.rate_limited = rate_limited
        self.retry_after = retry_after

        self.details.update(
            {
                "api_response_code": api_response_code,
                "rate_limited": rate_limited,
                "retry_after": retry_after,
            }
        )


class BulkOperationException(AppException):
    """
    A bulk export job failed, was canceled, expired or did not finish in time.
    """

    def __init__(
        self,
        message: str,
        operation_id: Optional[str] = None,
        status: Optional[str] = None,
        timed_out: bool = False,
        **kwargs,
    ):
        super().__init__(
            message=message,
            error_code=ErrorCode.BULK_OPERATION_TIMEOUT if timed_out else ErrorCode.BULK_OPERATION_FAILED,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.operation_id = operation_id
        self.status = status
        self.timed_out = timed_out

        self.details.update({"operation_id": operation_id, "status": status, "timed_out": timed_out})


class DocumentBuildError(AppException):
    """
    A GraphQL document could not be assembled (for example, two different
    fragments sharing one name).
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.DOCUMENT_BUILD_ERROR,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )


class OrderOperationException(AppException):
    """
    Executor failure surfaced by the order service.

    The message is the original failure prefixed with the operation kind
    ("query", "bulk query" or "mutation"); the original exception is chained
    as ``__cause__``.
    """

    def __init__(self, operation_kind: str, cause: BaseException, **kwargs):
        super().__init__(
            message=f"{operation_kind}: {cause}",
            error_code=ErrorCode.ORDER_OPERATION_FAILED,
            is_retryable=getattr(cause, "is_retryable", False),
            **kwargs,
        )
        self.operation_kind = operation_kind
        self.cause = cause

        self.details.update({"operation_kind": operation_kind, "cause_type": type(cause).__name__})


class OrderUserErrorsException(AppException):
    """
    One or more field-level validation failures reported by an order mutation.

    Every reported problem is kept in ``user_errors`` and rendered in the
    message, so callers see all of them at once.
    """

    def __init__(self, user_errors: List["UserError"], operation: str = "orderUpdate", **kwargs):
        rendered = "; ".join(str(error) for error in user_errors)
        super().__init__(
            message=f"{operation} failed with {len(user_errors)} user error(s): {rendered}",
            error_code=ErrorCode.ORDER_USER_ERRORS,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.user_errors = list(user_errors)
        self.operation = operation

        self.details.update(
            {
                "operation": operation,
                "user_errors": [{"field": error.field, "message": error.message} for error in user_errors],
            }
        )


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error consistently.

    Args:
        exception: Exception to log
        context: Additional context
        level: Logging level
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"
        log_data["traceback"] = traceback.format_exc()

    logger.log(level, message, extra=log_data)
