"""
AWS Lambda Handlers Module.

This module contains the Lambda function handlers that serve as entry points
for the item gateway. Handlers follow the three-layer architecture pattern:

1. Handler Layer (this module): Request/response handling, method checks, validation
2. Logic Layer: Store-query construction for each operation
3. Data Access Layer: DynamoDB persistence

Entry points:
- items_handler.get_items_handler: GET, list one page of items
- items_handler.post_item_handler: POST, create or replace an item
- items_handler.delete_item_handler: DELETE, remove an item
- items_handler.lambda_handler: any of the above, dispatched by HTTP method
- hello_handler.hello_handler / hello_handler_v2: static hello responses
"""

# Re-export handler utilities for convenience
from item_gateway.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
