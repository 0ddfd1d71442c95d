"""Stored photo entity."""
from typing import Any

from pydantic import BaseModel, Field


class StoredPhoto(BaseModel):
    """An existing partner photo as handed over by the persistence layer.

    ``face_descriptor`` is kept as-is: it may be missing, a numeric array, or the
    JSON-array string some rows were written with. The match finder normalizes it.
    """
    id: str = Field(..., description="Unique photo identifier")
    partner_id: str = Field(..., description="Partner the photo belongs to")
    face_descriptor: Any = Field(None, description="Stored descriptor, array or JSON string")
