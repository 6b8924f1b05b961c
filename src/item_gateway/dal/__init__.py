"""
Data Access Layer (DAL) for the item gateway.

This module provides the store interface the logic layer depends on and the
factory used by the Lambda entry points to build the DynamoDB implementation.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ItemStore(Protocol):
    """Protocol defining the key-value store the gateway delegates to."""

    table_name: str

    def scan_items(self, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """Return a single page of records."""
        ...

    def put_item(self, item: dict[str, Any]) -> None:
        """Write a full record, replacing any record with the same key."""
        ...

    def delete_item(self, key: dict[str, Any]) -> None:
        """Delete the record with the given key if it exists."""
        ...


def get_dal_handler(table_name: str, endpoint_url: Optional[str] = None) -> ItemStore:
    """
    Factory function to get the DynamoDB item store.

    Args:
        table_name: Name of the DynamoDB table
        endpoint_url: Optional endpoint override for local testing

    Returns:
        Item store instance
    """
    # Import here to avoid circular imports
    from item_gateway.dal.dynamodb_handler import DynamoDbItemStore

    return DynamoDbItemStore(table_name, endpoint_url=endpoint_url)


__all__ = [
    'ItemStore',
    'get_dal_handler',
]
