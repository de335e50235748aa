"""
Page aggregation for Query and Scan.

DynamoDB returns read results one page at a time and signals truncation with
``LastEvaluatedKey``. ``collect_pages`` hides that protocol: it keeps fetching
with ``ExclusiveStartKey`` until no token comes back and returns every record
in the order the pages delivered them.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

PageFetcher = Callable[..., Dict[str, Any]]


def collect_pages(fetch_page: PageFetcher, operation: str, **params) -> List[Dict[str, Any]]:
    """Fetch every page of a read operation and concatenate the records.

    A page with zero items but a continuation token does not stop the loop;
    server-side filters routinely produce such pages. An exception on any
    page propagates unchanged and the records gathered so far are dropped.

    Args:
        fetch_page: Single-page read, e.g. ``TableGateway.query``
        operation: Operation name used in log messages
        **params: Request parameters repeated on every page

    Returns:
        All records, in page order
    """
    records: List[Dict[str, Any]] = []
    start_key: Optional[Dict[str, Any]] = None
    pages = 0

    while True:
        request = dict(params)
        if start_key:
            request['ExclusiveStartKey'] = start_key

        response = fetch_page(**request)
        pages += 1

        items = response.get('Items', [])
        records.extend(items)
        logger.debug(f"{operation} page {pages}: {len(items)} items")

        start_key = response.get('LastEvaluatedKey')
        if not start_key:
            break

    logger.debug(f"{operation} finished after {pages} pages with {len(records)} items")
    return records
