"""Base entity for documents stored in MongoDB."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseEntity(BaseModel):
    """
    Common base for MongoDB documents.

    Documents in this application use natural string keys (comparison id,
    lower-cased username) rather than ObjectIds, exposed as ``id`` and stored
    as ``_id``.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias="_id")

    def to_mongo(self) -> Dict[str, Any]:
        """Serialize with snake_case field names and native BSON dates."""
        data = self.model_dump(exclude={"id"})
        if self.id is not None:
            data["_id"] = self.id
        return data
