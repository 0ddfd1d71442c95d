"""Photo upload decision value objects."""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from facematch.domain.value_objects.matching import FaceMatch


class PartnerMatchState(str, Enum):
    """How the new photo relates to the target partner's own photos."""
    NO_PHOTOS = "no_photos"
    MATCH = "match"
    NO_MATCH = "no_match"


class OtherPartnersMatchState(str, Enum):
    """How the new photo relates to every other partner's photos."""
    NO_PHOTOS = "no_photos"
    MATCH = "match"
    NO_MATCH = "no_match"


class UploadDecisionType(str, Enum):
    PROCEED = "proceed"
    WARN_SAME_PERSON = "warn_same_person"
    WARN_OTHER_PARTNERS = "warn_other_partners"


class UploadDecisionReason(str, Enum):
    NO_MATCHES = "no_matches"
    MATCHES_PARTNER_OR_NO_PHOTOS = "matches_partner_or_no_photos"
    DOESNT_MATCH_PARTNER_HAS_PHOTOS = "doesnt_match_partner_has_photos"
    MATCHES_OTHER_PARTNERS = "matches_other_partners"


class NoPartnerDecisionType(str, Enum):
    CREATE_NEW = "create_new"
    WARN_MATCHES = "warn_matches"


class UploadContext(BaseModel):
    """Facts about an upload that targets a specific partner."""
    partner_matches: List[FaceMatch] = Field(default_factory=list, description="Matches against the partner's photos")
    other_partner_matches: List[FaceMatch] = Field(default_factory=list, description="Matches against other partners' photos")
    partner_has_other_photos: bool = Field(..., description="Whether the partner already has photos")
    other_partners_have_photos: bool = Field(False, description="Whether any other partner has photos")


class UploadDecision(BaseModel):
    """What the upload flow should do next.

    ``matches`` is only populated for ``warn_other_partners`` and holds the
    other-partner matches exactly as the match finder returned them.
    """
    type: UploadDecisionType
    reason: UploadDecisionReason
    matches: List[FaceMatch] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PhotoUploadAnalysis(BaseModel):
    """Decision plus the inputs it was derived from."""
    decision: UploadDecision
    partner_state: PartnerMatchState
    other_partners_state: OtherPartnersMatchState
    partner_matches: List[FaceMatch] = Field(default_factory=list)
    other_partner_matches: List[FaceMatch] = Field(default_factory=list)
    partner_has_other_photos: bool


class NoPartnerUploadDecision(BaseModel):
    """Decision for an upload made before any partner was chosen."""
    decision: NoPartnerDecisionType
    matches: List[FaceMatch] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
