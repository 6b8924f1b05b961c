"""
Error handling utilities for the item gateway handlers.

Every failure the gateway can report is a BaseServiceError subclass carrying a
machine-readable code, a category and a structured context. Handlers convert
these into the error payload returned to the caller.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field

from item_gateway.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    METHOD = "METHOD"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Item identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.INFRASTRUCTURE,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.details = details or {}
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "details": self.details,
            "context": self.context.model_dump(mode="json") if self.context else None,
        }


class InvalidMethodError(BaseServiceError):
    """Raised when an operation is invoked with the wrong HTTP verb."""

    def __init__(
        self,
        operation: str,
        expected: List[str],
        actual: Optional[str],
        context: Optional[ErrorContext] = None,
    ):
        expected_text = " or ".join(expected)
        super().__init__(
            message=f"{operation} only accepts {expected_text} method, you tried: {actual}",
            error_code="INVALID_METHOD",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.METHOD,
            context=context,
            details={"expected_method": expected_text, "actual_method": actual},
        )
        self.expected = expected
        self.actual = actual


class ValidationError(BaseServiceError):
    """Raised when the request body is missing, malformed or invalid."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
        )
        self.field_errors = field_errors or []


class StoreError(BaseServiceError):
    """Raised when a call to the item store fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        table_name: str,
        key: Optional[Dict[str, Any]] = None,
        store_error_code: Optional[str] = None,
        context: Optional[ErrorContext] = None,
    ):
        details: Dict[str, Any] = {"operation": operation, "table_name": table_name}
        if key is not None:
            details["key"] = key
        if store_error_code:
            details["store_error_code"] = store_error_code
        super().__init__(
            message=message,
            error_code="STORE_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            details=details,
        )
        self.operation = operation
        self.table_name = table_name
        self.key = key
        self.store_error_code = store_error_code


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
    **additional_data: Any,
) -> ErrorContext:
    """Create an error context for consistent error handling."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
        additional_data=additional_data,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)
    tracer.put_metadata("error_details", error.to_dict())

    logger.error(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "error_details": error.details,
            "context": error.context.model_dump(mode="json") if error.context else None,
        }
    )


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response."""

    response: Dict[str, Any] = {
        "error": {
            "code": error.error_code,
            "message": error.message,
            "error_id": error.error_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }

    if error.details:
        response["error"]["details"] = error.details

    if isinstance(error, ValidationError) and error.field_errors:
        response["error"]["field_errors"] = error.field_errors

    return response


def get_http_status_code(error: BaseServiceError) -> int:
    """Get HTTP status code for error."""

    # Every failure the gateway recognizes is reported as a handled 400
    status_mapping = {
        "INVALID_METHOD": 400,
        "VALIDATION_ERROR": 400,
        "STORE_ERROR": 400,
    }

    return status_mapping.get(error.error_code, 500)
