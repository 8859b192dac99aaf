"""
Layer Dynamo - Core Error Types

Defines the exception hierarchy for the DynamoDB cache layer.
All exceptions raised by this package inherit from LayerDynamoError.

Propagation policy:
- ConfigurationError is reported at layer construction and raised by later operations
- CorruptionError is reported and the read degrades to a miss
- CacheTimeoutError and EncodeError propagate to the caller
- botocore errors are never wrapped
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes attached to error reports.
    """

    # Configuration errors
    MISSING_TABLE_NAME = "MISSING_TABLE_NAME"
    MISSING_AWS_CONFIG = "MISSING_AWS_CONFIG"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Cache errors
    CACHE_TIMEOUT = "CACHE_TIMEOUT"
    CACHE_CORRUPTION = "CACHE_CORRUPTION"
    CACHE_ENCODE_FAILURE = "CACHE_ENCODE_FAILURE"
    CACHE_FAILURE = "CACHE_FAILURE"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class LayerDynamoError(Exception):
    """Base exception for all Layer Dynamo errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for error reports."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LayerDynamoError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)


class CacheError(LayerDynamoError):
    """Base exception for cache-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)


class CacheTimeoutError(CacheError):
    """Raised when a DynamoDB request exceeds its deadline."""

    def __init__(self, operation: str, key: str, timeout_ms: int):
        message = f"DynamoDB {operation} timed out after {timeout_ms}ms for key: {key}"
        super().__init__(
            message,
            {
                "operation": operation,
                "key": key,
                "timeout_ms": timeout_ms,
                "error_code": ErrorCode.CACHE_TIMEOUT,
            },
        )
        self.operation = operation
        self.key = key
        self.timeout_ms = timeout_ms


class CorruptionError(CacheError):
    """Raised when a stored item violates the encode/decode invariant."""

    def __init__(self, message: str, key: str | None = None, details: dict[str, Any] | None = None):
        error_details = dict(details or {})
        error_details.update({"key": key, "error_code": ErrorCode.CACHE_CORRUPTION})
        super().__init__(message, error_details)
        self.key = key


class EncodeError(CacheError):
    """Raised when a cache value cannot be serialized to JSON."""

    def __init__(self, key: str, value_type: str, details: dict[str, Any] | None = None):
        message = f"Failed to serialize value of type {value_type} for key: {key}"
        error_details = dict(details or {})
        error_details.update(
            {
                "key": key,
                "value_type": value_type,
                "error_code": ErrorCode.CACHE_ENCODE_FAILURE,
            }
        )
        super().__init__(message, error_details)
        self.key = key


def extract_error_code(error: BaseException) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, LayerDynamoError):
        code = error.details.get("error_code")
        if isinstance(code, ErrorCode):
            return code

    if isinstance(error, CacheTimeoutError):
        return ErrorCode.CACHE_TIMEOUT

    if isinstance(error, CorruptionError):
        return ErrorCode.CACHE_CORRUPTION

    if isinstance(error, EncodeError):
        return ErrorCode.CACHE_ENCODE_FAILURE

    if isinstance(error, CacheError):
        return ErrorCode.CACHE_FAILURE

    if isinstance(error, ConfigurationError):
        return ErrorCode.INVALID_CONFIGURATION

    return ErrorCode.INTERNAL_ERROR
