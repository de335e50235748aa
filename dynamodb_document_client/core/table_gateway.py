"""
Thin DynamoDB Table Gateway

This module binds a low-level boto3 DynamoDB client to one table and exposes
exactly the item operations the document client needs:

- get_item / put_item / delete_item: single round trips
- query / scan: one page per call, raw response returned

The gateway works on records (attribute-value maps) only. Marshalling and
pagination live one layer up. Every botocore failure is logged here, at the
point of detection, and re-raised as a RequestError.
"""

import logging
from typing import Any, Callable, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import DynamoDBConfig
from ..exceptions import ConfigurationError, RequestError

logger = logging.getLogger(__name__)

RETRYABLE_ERROR_CODES = frozenset({
    'ProvisionedThroughputExceededException',
    'RequestLimitExceeded',
    'ThrottlingException',
    'TooManyRequestsException',
    'InternalServerError',
    'ServiceUnavailable',
    'ServiceUnavailableException',
    'RequestTimeoutException',
    'TransactionConflictException',
})

CATEGORY_BY_ERROR_CODE = {
    'ValidationException': "Validation failed",
    'ResourceNotFoundException': "Table not found",
    'ConditionalCheckFailedException': "Conditional check failed",
    'ItemCollectionSizeLimitExceededException': "Item collection size limit exceeded",
    'UnrecognizedClientException': "Authentication/authorization failed",
    'AccessDeniedException': "Authentication/authorization failed",
    'ExpiredTokenException': "Token expired",
    'InvalidSignatureException': "Invalid endpoint or signature",
}


def map_request_error(error: Exception, operation: str, table_name: str) -> RequestError:
    """Map a botocore failure to a RequestError.

    Args:
        error: ClientError from the service or BotoCoreError from the transport
        operation: The operation that failed (e.g., "GetItem", "Query")
        table_name: The DynamoDB table name

    Returns:
        RequestError carrying the error code, a retryable flag and the original error
    """
    context = f"{operation} on {table_name}"

    if isinstance(error, ClientError):
        error_code = error.response.get('Error', {}).get('Code', 'Unknown')
        error_message = error.response.get('Error', {}).get('Message', str(error))

        if error_code in RETRYABLE_ERROR_CODES:
            category = "Throttling/service unavailable"
        else:
            category = CATEGORY_BY_ERROR_CODE.get(error_code, "DynamoDB operation failed")

        return RequestError(
            f"{category} - {context}: {error_message}",
            operation,
            table_name,
            code=error_code,
            retryable=error_code in RETRYABLE_ERROR_CODES,
            original_error=error
        )

    return RequestError(
        f"Request failed - {context}: {error}",
        operation,
        table_name,
        original_error=error
    )


def build_dynamodb_client(
    config: DynamoDBConfig,
    client_hook: Optional[Callable[[Dict[str, Any]], None]] = None
):
    """Create a low-level boto3 DynamoDB client from resolved configuration.

    Args:
        config: Resolved DynamoDB configuration
        client_hook: Optional callable that may edit the client keyword arguments

    Returns:
        boto3 DynamoDB client

    Raises:
        ConfigurationError: If credentials cannot be resolved or the client cannot be built
    """
    try:
        session = boto3.Session(**config.session_kwargs())
    except BotoCoreError as e:
        logger.error(f"Failed to create boto3 session: {e}")
        raise ConfigurationError(f"Failed to create boto3 session: {e}", e) from e

    if session.get_credentials() is None:
        logger.error("No AWS credentials could be resolved")
        raise ConfigurationError(
            "No AWS credentials could be resolved",
            context={'region_name': config.region_name, 'profile_name': config.profile_name}
        )

    client_kwargs: Dict[str, Any] = {
        'region_name': config.region_name,
        'config': config.boto_config()
    }
    if config.endpoint_url:
        client_kwargs['endpoint_url'] = config.endpoint_url

    try:
        if client_hook is not None:
            client_hook(client_kwargs)
        return session.client('dynamodb', **client_kwargs)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB client: {e}")
        raise ConfigurationError(f"Failed to create DynamoDB client: {e}", e) from e


class TableGateway:
    """
    Thin gateway for DynamoDB item operations on a single table.

    Any object exposing the low-level client's ``get_item``, ``put_item``,
    ``delete_item``, ``query`` and ``scan`` methods can be injected, which is
    how unit tests substitute a mock.
    """

    def __init__(self, table_name: str, client: Any):
        """Initialize table gateway.

        Args:
            table_name: Name of the DynamoDB table
            client: boto3 DynamoDB client (or compatible object)
        """
        self.table_name = table_name
        self.client = client

    def _call(self, operation: str, method: Callable[..., Dict[str, Any]], **kwargs) -> Dict[str, Any]:
        try:
            return method(TableName=self.table_name, **kwargs)
        except (ClientError, BotoCoreError) as e:
            mapped = map_request_error(e, operation, self.table_name)
            logger.error(str(mapped))
            raise mapped from e

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Fetch one record by primary key.

        Args:
            key: Primary key in attribute-value form

        Returns:
            The record, or None if no item exists for the key
        """
        response = self._call("GetItem", self.client.get_item, Key=key)
        return response.get('Item')

    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Store a record, replacing any item with the same key.

        No condition expression is sent, so the write is unconditional.
        """
        self._call("PutItem", self.client.put_item, Item=item)
        logger.info(f"Put item in {self.table_name}")

    def delete_item(self, key: Dict[str, Any]) -> None:
        """
        Delete a record by primary key. Deleting an absent key succeeds.
        """
        self._call("DeleteItem", self.client.delete_item, Key=key)
        logger.info(f"Deleted item from {self.table_name}: {key}")

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a single Query page.

        Args:
            **kwargs: boto3 query parameters other than TableName

        Returns:
            Raw DynamoDB response
        """
        return self._call("Query", self.client.query, **kwargs)

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a single Scan page.

        Args:
            **kwargs: boto3 scan parameters other than TableName

        Returns:
            Raw DynamoDB response
        """
        return self._call("Scan", self.client.scan, **kwargs)


def create_table_gateway(
    config: DynamoDBConfig,
    table_name: str,
    client_hook: Optional[Callable[[Dict[str, Any]], None]] = None
) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Resolved DynamoDB configuration
        table_name: Table name
        client_hook: Optional callable that may edit the client keyword arguments

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(table_name, build_dynamodb_client(config, client_hook))
