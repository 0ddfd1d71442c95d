"""API models for photo upload evaluation."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from facematch.domain.entities.photo import StoredPhoto

MIN_THRESHOLD = 0.0
MAX_THRESHOLD = 1.0


class NoPartnerEvaluationRequest(BaseModel):
    """Request model for the /evaluate-without-partner endpoint."""
    descriptor: List[float] = Field(..., description="Descriptor of the uploaded photo's face", min_length=1)
    photos: List[StoredPhoto] = Field(default_factory=list, description="All of the user's stored photos")
    partner_names: Optional[Dict[str, str]] = Field(None, description="Partner id to display name")
    threshold: Optional[float] = Field(
        None,
        description="Minimum similarity for a match (0.0 to 1.0), server default if omitted",
        ge=MIN_THRESHOLD, le=MAX_THRESHOLD
    )


class PartnerEvaluationRequest(NoPartnerEvaluationRequest):
    """Request model for the /evaluate endpoint."""
    partner_id: str = Field(..., description="Partner the photo is being added to", min_length=1)
    exclude_photo_id: Optional[str] = Field(None, description="Photo to ignore, e.g. the one being replaced")
