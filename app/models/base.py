"""
Pydantic base models shared by request/response schemas.

Documents are stored with camelCase keys (the mobile client reads the same
collections); Python code uses snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base for every schema that mirrors a stored document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self, exclude_unset: bool = False) -> dict:
        """Dump with camelCase keys, ready to write to the store."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)


class BaseResponse(BaseModel):
    """Simple acknowledgement body for write endpoints."""
    success: bool = True
    message: Optional[str] = None
