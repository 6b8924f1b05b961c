"""
Service Models Package

This package contains the Pydantic models used throughout the gateway: the
Item domain model and the request models validated by each operation.
"""

from .input import DeleteItemRequest, UpsertItemRequest
from .item import Item

__all__ = [
    # Input models
    "UpsertItemRequest",
    "DeleteItemRequest",

    # Domain models
    "Item",
]
