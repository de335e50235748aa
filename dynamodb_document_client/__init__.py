from .config import ClientOptions, DynamoDBConfig
from .exceptions import (
    ConfigurationError,
    DecodeError,
    DocumentClientError,
    EncodeError,
    InvalidArgumentError,
    ItemNotFoundError,
    RequestError,
)
from .expression import Expression, ExpressionBuilder
from .utils import marshal_item, unmarshal_into, unmarshal_item
from .core import TableGateway, create_table_gateway
from .client import DocumentClient, create_client, get_or_create_client

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "ClientOptions",
    "DynamoDBConfig",

    # Exceptions
    "ConfigurationError",
    "DecodeError",
    "DocumentClientError",
    "EncodeError",
    "InvalidArgumentError",
    "ItemNotFoundError",
    "RequestError",

    # Expressions
    "Expression",
    "ExpressionBuilder",

    # Marshalling
    "marshal_item",
    "unmarshal_item",
    "unmarshal_into",

    # Gateway
    "TableGateway",
    "create_table_gateway",

    # Client and lifecycle
    "DocumentClient",
    "create_client",
    "get_or_create_client",
]
