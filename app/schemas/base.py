"""
Shared Pydantic base classes.

The API speaks camelCase JSON (numEmployees, companyHandle, ...) while the
Python attributes stay snake_case.
"""

from typing import Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds
INT4_MAX = 2_147_483_647


class CamelModel(BaseModel):
    """Response schema base: snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelRequest(CamelModel):
    """Request schema base: unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")

    def to_update(self) -> dict:
        """Explicitly supplied fields, keyed by their JSON names, JSON-safe values."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class DeletedResponse(CamelModel):
    """Response for DELETE endpoints"""
    deleted: Union[str, int]
