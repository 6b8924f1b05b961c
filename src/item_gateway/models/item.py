"""
Item domain model.

An Item is the single record type stored in the table. Upserts always write
the full record, so every optional field is filled with its empty default
before it reaches the store.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Item(BaseModel):
    """Core Item domain model."""

    model_config = ConfigDict(populate_by_name=True)

    id: Annotated[str, Field(
        min_length=1,
        description='Unique identifier and partition key of the item',
        examples=['a1']
    )]

    display_name: Annotated[str, Field(
        alias='displayName',
        description='Human readable name of the item',
        examples=['Mammalia']
    )] = ''

    description: Annotated[str, Field(
        description='Free-form description of the item',
    )] = ''

    parent_ids: Annotated[list[str], Field(
        alias='parentIds',
        description='Identifiers of parent items, not integrity-checked',
        examples=[['chordata']]
    )] = []

    child_ids: Annotated[list[str], Field(
        alias='childIds',
        description='Identifiers of child items, not integrity-checked',
    )] = []

    alternate_names: Annotated[list[str], Field(
        alias='alternateNames',
        description='Other names the item is known by',
    )] = []

    @field_validator('display_name', 'description', mode='before')
    @classmethod
    def null_to_empty_string(cls, v: Any) -> Any:
        """Treat an explicit null as an absent field."""
        return '' if v is None else v

    @field_validator('parent_ids', 'child_ids', 'alternate_names', mode='before')
    @classmethod
    def coerce_string_list(cls, v: Any) -> Any:
        """Accept null, a comma separated string, or a list of strings."""
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(',') if part.strip()]
        if isinstance(v, (set, frozenset)):
            return sorted(v)
        return v

    def to_record(self) -> dict[str, Any]:
        """Full replacement record in the store's attribute names."""
        return self.model_dump(by_alias=True)
