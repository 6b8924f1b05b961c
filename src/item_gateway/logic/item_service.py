"""
Item business logic.

Each function builds the store call for one gateway operation. They take the
store as an argument and keep no state between calls.
"""

from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from item_gateway.dal import ItemStore
from item_gateway.handlers.utils.observability import logger, metrics, tracer
from item_gateway.models.input import DeleteItemRequest, UpsertItemRequest
from item_gateway.models.item import Item


@tracer.capture_method
def list_items(store: ItemStore, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Return one page of every item in the table.

    Records are passed through as the store returned them: no filtering, no
    sorting, and no pagination beyond the first page.
    """
    items = store.scan_items(limit=limit)
    metrics.add_metric(name="ItemsListed", unit=MetricUnit.Count, value=len(items))
    logger.info("Items listed", extra={"table_name": store.table_name, "count": len(items)})
    return items


@tracer.capture_method
def upsert_item(store: ItemStore, request: UpsertItemRequest) -> Item:
    """
    Create or fully replace the item keyed by ``request.id``.

    Last writer wins; there is no existence or version check.

    Returns:
        The normalized item that was written
    """
    item = Item.model_validate(request.model_dump())
    store.put_item(item.to_record())
    metrics.add_metric(name="ItemUpserted", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("item_id", item.id)
    return item


@tracer.capture_method
def delete_item(store: ItemStore, request: DeleteItemRequest) -> DeleteItemRequest:
    """Delete the item keyed by ``request.id``; a missing item is not an error."""
    store.delete_item(request.to_key())
    metrics.add_metric(name="ItemDeleted", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("item_id", request.id)
    return request
