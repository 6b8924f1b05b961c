"""
Item Access Gateway.

Serverless handlers exposing list, upsert and delete access to a single
DynamoDB table of items:

- handlers: API Gateway entry points and response shaping
- logic: store-query construction per operation
- dal: the item store protocol and its DynamoDB implementation
- models: Pydantic models for items and requests
"""

__version__ = "1.0.0"

from item_gateway.models.item import Item

__all__ = [
    "Item",
    "__version__",
]
