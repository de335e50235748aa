"""
Error kinds raised by the document client.

Every exception extends DocumentClientError so callers can catch the whole
family at once, or pick out the specific condition they care about.

Organized by category:
1. Configuration Errors
2. Caller Errors
3. Lookup Errors
4. Marshalling Errors
5. Request Errors
"""

from typing import Any, Dict, Optional

from .base import DocumentClientError


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(DocumentClientError):
    """Raised when the ambient DynamoDB configuration cannot be resolved.

    Used for:
    - Configuration hooks that raise
    - Invalid configuration values (pydantic validation)
    - Missing credentials or region
    - boto3 client construction failures

    A client is never handed out after this error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


# =============================================================================
# Caller Errors
# =============================================================================

class InvalidArgumentError(DocumentClientError):
    """Raised when the caller passes an argument the client cannot work with.

    Used for:
    - get() targets that cannot receive a decoded record
    - Empty table names
    - Queries without a key condition
    - Conditions that cannot be built into an expression
    """

    def __init__(self, message: str, argument: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize invalid argument error.

        Args:
            message: Human-readable error message
            argument: Name of the offending argument
            original_error: The original exception that caused this error
        """
        self.argument = argument
        context = {}
        if argument:
            context['argument'] = argument
        super().__init__(message, original_error, context)


# =============================================================================
# Lookup Errors
# =============================================================================

class ItemNotFoundError(DocumentClientError):
    """Raised when GetItem returns no item for the requested key."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Marshalling Errors
# =============================================================================

class EncodeError(DocumentClientError):
    """Raised when a native value cannot be marshalled into a record."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)


class DecodeError(DocumentClientError):
    """Raised when a record does not fit the shape of the decode target."""

    def __init__(self, message: str, target: Optional[str] = None, original_error: Optional[Exception] = None):
        self.target = target
        context = {}
        if target:
            context['target'] = target
        super().__init__(message, original_error, context)


# =============================================================================
# Request Errors
# =============================================================================

class RequestError(DocumentClientError):
    """Raised when a DynamoDB call fails.

    Used for:
    - ClientError responses (throttling, validation, missing table, auth)
    - botocore transport failures (connectivity, timeouts, parameter validation)

    The botocore exception is kept as ``original_error``; nothing is retried
    here beyond what botocore's retry configuration already did.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        table_name: str,
        code: Optional[str] = None,
        retryable: bool = False,
        original_error: Optional[Exception] = None
    ):
        """Initialize request error.

        Args:
            message: Human-readable error message
            operation: The DynamoDB operation that failed (e.g., "GetItem")
            table_name: The DynamoDB table name
            code: DynamoDB error code, None for transport failures
            retryable: Whether the failure is transient (throttling, service unavailable)
            original_error: The original exception that caused this error
        """
        self.operation = operation
        self.table_name = table_name
        self.code = code
        self.retryable = retryable
        context = {
            'operation': operation,
            'table_name': table_name
        }
        if code:
            context['code'] = code
        context['retryable'] = retryable
        super().__init__(message, original_error, context)
