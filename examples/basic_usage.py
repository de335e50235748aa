#!/usr/bin/env python3
"""
Basic usage examples for the DynamoDB document client.

This example demonstrates:
1. Obtaining the shared client with configuration hooks
2. Typed put/get/delete with dicts and pydantic models
3. Auto-paginating query and scan with expressions
4. Handling the client's error kinds

Run against DynamoDB Local (``docker run -p 8000:8000 amazon/dynamodb-local``)
with a ``Widgets`` table keyed on ``id``.
"""

from typing import List

from boto3.dynamodb.conditions import Attr, Key
from pydantic import BaseModel

from dynamodb_document_client import (
    ClientOptions,
    DocumentClientError,
    ExpressionBuilder,
    ItemNotFoundError,
    get_or_create_client,
    unmarshal_item,
)


class Widget(BaseModel):
    id: str
    qty: int
    tags: List[str] = []


def use_local_endpoint(config):
    config.endpoint_url = "http://localhost:8000"
    config.aws_access_key_id = "local"
    config.aws_secret_access_key = "local"


def main():
    """Walk through the document client API."""

    # 1. Shared client, configured for DynamoDB Local
    print("1. Creating shared client...")
    client = get_or_create_client("Widgets", ClientOptions(config_hook=use_local_endpoint))

    # 2. Single-item operations
    print("2. Writing and reading widgets...")
    client.put({'id': 'w1', 'qty': 5})
    client.put(Widget(id='w2', qty=12, tags=['large']))

    widget = {}
    client.get({'id': 'w1'}, widget)
    print(f"   w1 as dict: {widget}")

    w2 = client.get({'id': 'w2'}, Widget)
    print(f"   w2 as model: {w2}")

    # 3. Scan with a server-side filter; every page is fetched
    print("3. Scanning for widgets with qty > 3...")
    expr = ExpressionBuilder().with_filter(Attr('qty').gt(3)).build()
    for record in client.scan(expr):
        print(f"   {unmarshal_item(record)}")

    # Query needs a key condition
    expr = ExpressionBuilder().with_key_condition(Key('id').eq('w2')).build()
    print(f"   query w2: {[unmarshal_item(r) for r in client.query(expr)]}")

    # 4. Delete and observe NotFound
    print("4. Deleting w1...")
    client.delete({'id': 'w1'})
    try:
        client.get({'id': 'w1'}, widget)
    except ItemNotFoundError as e:
        print(f"   {e}")
    except DocumentClientError as e:
        print(f"   request failed: {e}")


if __name__ == "__main__":
    main()
