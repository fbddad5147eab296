"""
Base record type for values kept in the record store.

Stored JSON uses camelCase field names; Python code uses snake_case.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Tolerate fields written by older clients
        str_strip_whitespace=True,
    )

    def to_json(self) -> dict[str, Any]:
        """Serialized form written to the store and returned to clients."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
