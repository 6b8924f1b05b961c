"""
Business Logic Layer Module.

Store-query construction for the three item operations. Handlers call these
functions with the store taken from their injected configuration.
"""

from item_gateway.logic.item_service import delete_item, list_items, upsert_item

__all__ = [
    "list_items",
    "upsert_item",
    "delete_item",
]
