"""
Core infrastructure components for DynamoDB operations.

- TableGateway: Thin wrapper over the low-level boto3 DynamoDB client
- collect_pages: Follows continuation tokens until a read is exhausted
- Factory functions for creating clients and gateways
"""

from .pagination import collect_pages
from .table_gateway import (
    TableGateway,
    build_dynamodb_client,
    create_table_gateway,
    map_request_error,
)

__all__ = [
    "TableGateway",
    "build_dynamodb_client",
    "collect_pages",
    "create_table_gateway",
    "map_request_error",
]
