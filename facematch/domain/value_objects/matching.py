"""Face matching value objects."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FaceMatch(BaseModel):
    """A stored photo whose descriptor met the similarity threshold."""
    photo_id: str = Field(..., description="Matched photo identifier")
    partner_id: str = Field(..., description="Partner owning the matched photo")
    partner_name: Optional[str] = Field(None, description="Display name, filled in by the caller")
    similarity: float = Field(..., description="Similarity score (0.0 to 1.0)", ge=0.0, le=1.0)
    confidence: float = Field(..., description="Similarity as a percentage (0 to 100)", ge=0.0, le=100.0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_similarity(
        cls,
        photo_id: str,
        partner_id: str,
        similarity: float,
        partner_name: Optional[str] = None,
    ) -> "FaceMatch":
        """Build a match, deriving the confidence percentage from the similarity."""
        return cls(
            photo_id=photo_id,
            partner_id=partner_id,
            partner_name=partner_name,
            similarity=similarity,
            confidence=similarity * 100,
        )
