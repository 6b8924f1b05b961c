"""
Input models for request validation using Pydantic.
"""

from typing import Annotated

from pydantic import BaseModel, Field

from item_gateway.models.item import Item


class UpsertItemRequest(Item):
    """Request model for creating or replacing an item."""


class DeleteItemRequest(BaseModel):
    """Request model for deleting an item by its identifier."""

    id: Annotated[str, Field(
        min_length=1,
        description='Identifier of the item to delete',
        examples=['a1']
    )]

    def to_key(self) -> dict[str, str]:
        return {'id': self.id}
