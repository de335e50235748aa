"""
Document client and its lifecycle.

``DocumentClient`` wraps one table with typed get/put/delete and
auto-paginating query/scan. Two ways to obtain one:

- ``get_or_create_client``: the process-wide shared client. The first call
  resolves configuration and builds the client under a lock; every later call
  returns that same instance.
- ``create_client``: a fresh client owned by the caller, for code that passes
  its dependencies explicitly.
"""

import logging
import threading
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel

from .config import ClientOptions, DynamoDBConfig
from .core import TableGateway, collect_pages, create_table_gateway
from .exceptions import ConfigurationError, InvalidArgumentError, ItemNotFoundError
from .expression import Expression
from .utils import DecodeTarget, Record, check_decode_target, marshal_item, unmarshal_into

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "dynamodb_document_client"


class DocumentClient:
    """
    Typed item access to a single DynamoDB table.

    Single-item operations make exactly one request. Query and scan follow
    continuation tokens until the result set is exhausted and return every
    record at once; a failure on any page raises and no partial result is
    returned.
    """

    def __init__(self, gateway: TableGateway):
        """Initialize the client.

        Args:
            gateway: Gateway bound to the target table
        """
        self._gateway = gateway

    @property
    def table_name(self) -> str:
        return self._gateway.table_name

    @property
    def gateway(self) -> TableGateway:
        return self._gateway

    def get(self, key: Mapping[str, Any], target: DecodeTarget) -> Any:
        """
        Fetch one item and decode it into ``target``.

        DynamoDB Operation: GetItem with primary key

        Args:
            key: Primary key fields, e.g. ``{'id': 'w1'}``
            target: Mutable mapping or pydantic model instance (filled in place),
                or pydantic model class (a new instance is returned)

        Returns:
            The decoded item

        Raises:
            InvalidArgumentError: If target cannot receive a record (no request is made)
            ItemNotFoundError: If no item exists for the key; target is left untouched
            DecodeError: If the item does not fit the target
            EncodeError: If the key cannot be marshalled
            RequestError: If the request fails
        """
        check_decode_target(target)

        record = self._gateway.get_item(marshal_item(key))
        if record is None:
            raise ItemNotFoundError(self.table_name, dict(key))

        return unmarshal_into(record, target)

    def put(self, value: Union[Mapping[str, Any], BaseModel]) -> None:
        """
        Store an item, replacing any existing item with the same key.

        DynamoDB Operation: PutItem without condition expression

        Raises:
            EncodeError: If the value cannot be marshalled
            RequestError: If the request fails
        """
        self._gateway.put_item(marshal_item(value))

    def delete(self, key: Mapping[str, Any]) -> None:
        """
        Delete an item. Deleting an absent key is not an error.

        DynamoDB Operation: DeleteItem

        Raises:
            EncodeError: If the key cannot be marshalled
            RequestError: If the request fails
        """
        self._gateway.delete_item(marshal_item(key))

    def query(self, expr: Expression) -> List[Record]:
        """
        Run a query and return every matching record across all pages.

        DynamoDB Operation: Query, repeated with ExclusiveStartKey

        Args:
            expr: Expression with a key condition and optional filter/projection

        Returns:
            Records in attribute-value form, in the order DynamoDB returned them

        Raises:
            InvalidArgumentError: If expr has no key condition
            RequestError: If any page fails
        """
        if not expr.key_condition:
            raise InvalidArgumentError("Query requires a key condition", argument='expr')

        return collect_pages(self._gateway.query, "Query", **expr.request_params())

    def scan(self, expr: Optional[Expression] = None) -> List[Record]:
        """
        Scan the table and return every record across all pages.

        DynamoDB Operation: Scan, repeated with ExclusiveStartKey

        Args:
            expr: Optional expression with filter/projection

        Returns:
            Records in attribute-value form, in scan order

        Raises:
            InvalidArgumentError: If expr carries a key condition (no request is made)
            RequestError: If any page fails
        """
        expr = expr or Expression()
        if expr.key_condition:
            raise InvalidArgumentError(
                "Scan does not accept a key condition; use query or a filter",
                argument='expr'
            )

        return collect_pages(self._gateway.scan, "Scan", **expr.request_params())


# =============================================================================
# Lifecycle
# =============================================================================

def resolve_config(options: Optional[ClientOptions] = None) -> DynamoDBConfig:
    """Load DynamoDBConfig from the environment and apply the config hook.

    Raises:
        ConfigurationError: If loading, validation or the hook fails
    """
    options = options or ClientOptions()
    try:
        config = DynamoDBConfig.from_env()
        if options.config_hook is not None:
            options.config_hook(config)
    except Exception as e:
        logger.error(f"Failed to resolve DynamoDB configuration: {e}")
        raise ConfigurationError(f"Failed to resolve DynamoDB configuration: {e}", e) from e

    if config.enable_debug_logging:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    return config


def _validate_table_name(table: Any) -> None:
    if not isinstance(table, str) or not table:
        raise InvalidArgumentError(f"Table name must be a non-empty string, got {table!r}", argument='table')


def create_client(table: str, options: Optional[ClientOptions] = None) -> DocumentClient:
    """
    Build a new DocumentClient owned by the caller.

    Args:
        table: DynamoDB table name
        options: Optional config/client hooks

    Returns:
        Fresh DocumentClient

    Raises:
        InvalidArgumentError: If the table name is empty
        ConfigurationError: If configuration cannot be resolved
    """
    _validate_table_name(table)
    options = options or ClientOptions()

    config = resolve_config(options)
    gateway = create_table_gateway(config, table, options.client_hook)
    logger.info(f"Created DynamoDB document client for table '{table}' in {config.region_name}")
    return DocumentClient(gateway)


_shared_client: Optional[DocumentClient] = None
_shared_client_lock = threading.Lock()


def get_or_create_client(table: str, options: Optional[ClientOptions] = None) -> DocumentClient:
    """
    Return the process-wide DocumentClient, creating it on first use.

    The lock is held only while checking and constructing, never during
    requests. Configuration is resolved once; later calls get the same
    instance even when they pass another table or other options, and a
    differing table name is logged as a warning. If construction fails, no
    client is stored and the next call tries again.

    Raises:
        InvalidArgumentError: If the table name is empty
        ConfigurationError: If configuration cannot be resolved
    """
    global _shared_client

    _validate_table_name(table)
    with _shared_client_lock:
        if _shared_client is None:
            _shared_client = create_client(table, options)
        elif _shared_client.table_name != table:
            logger.warning(
                f"Shared client is bound to table '{_shared_client.table_name}'; "
                f"ignoring request for table '{table}'"
            )
        return _shared_client
