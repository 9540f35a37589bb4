"""
Domain-specific exceptions for the Transaction Explorer service.

Collaborator failures (data source, rule storage) derive from ServiceError and
carry the exception that caused them. All domain errors are mapped to
appropriate HTTP status codes in the API layer.
"""

from typing import Any


class TransactionExplorerError(Exception):
    """Base exception for all transaction explorer domain errors."""

    code = "TRANSACTION_EXPLORER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TransactionExplorerError):
    """
    Raised when input data fails validation.

    Examples:
    - Rule draft missing a name, category or description
    - Incomplete predicate filter
    - Missing or non-numeric threshold value

    HTTP Status: 400 Bad Request
    """

    code = "VALIDATION_ERROR"


class NotFoundError(TransactionExplorerError):
    """
    Raised when a requested resource does not exist.

    Examples:
    - Rule ID not found

    HTTP Status: 404 Not Found
    """

    code = "NOT_FOUND"


class UnauthorizedError(TransactionExplorerError):
    """
    Raised when the analyst is not signed in.

    Examples:
    - Auth flag missing from the store
    - Wrong username or password on login

    HTTP Status: 401 Unauthorized
    """

    code = "UNAUTHORIZED"


class DataNotLoadedError(TransactionExplorerError):
    """
    Raised when the transaction dataset is not available.

    Examples:
    - Ingestion failed at startup and retries were exhausted
    - Dataset requested before the first load finished

    HTTP Status: 503 Service Unavailable
    """

    code = "DATA_NOT_LOADED"


class ServiceError(TransactionExplorerError):
    """Base exception for failures in an external collaborator."""

    code = "SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        original_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.original_error = original_error
        super().__init__(message, details)


class NetworkError(ServiceError):
    """
    Raised when the transaction data source cannot be reached.

    Examples:
    - Connection refused or timed out
    - Non-2xx HTTP status
    - Local CSV file missing

    HTTP Status: 502 Bad Gateway
    """

    code = "NETWORK_ERROR"

    def __init__(
        self,
        message: str = "Network request failed",
        original_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, original_error, details)


class ParseError(ServiceError):
    """
    Raised when the tabular payload is malformed.

    Examples:
    - Row with more or fewer fields than the header
    - Undecodable bytes

    HTTP Status: 502 Bad Gateway
    """

    code = "PARSE_ERROR"

    def __init__(
        self,
        message: str = "Data parsing failed",
        original_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, original_error, details)


class StorageError(ServiceError):
    """
    Raised when the key-value store cannot be read or written.

    HTTP Status: 503 Service Unavailable
    """

    code = "STORAGE_ERROR"

    def __init__(
        self,
        message: str = "Storage operation failed",
        original_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, original_error, details)


ERROR_STATUS_MAP = {
    ValidationError: 400,
    NotFoundError: 404,
    UnauthorizedError: 401,
    DataNotLoadedError: 503,
    NetworkError: 502,
    ParseError: 502,
    StorageError: 503,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)


def should_retry(error: BaseException) -> bool:
    """Only transport failures reaching the data source are worth retrying."""
    return isinstance(error, NetworkError)
