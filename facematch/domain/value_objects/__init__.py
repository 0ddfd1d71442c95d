"""Value objects package."""
from .decision import (
    NoPartnerDecisionType,
    NoPartnerUploadDecision,
    OtherPartnersMatchState,
    PartnerMatchState,
    PhotoUploadAnalysis,
    UploadContext,
    UploadDecision,
    UploadDecisionReason,
    UploadDecisionType,
)
from .matching import FaceMatch

__all__ = [
    "FaceMatch",
    "NoPartnerDecisionType",
    "NoPartnerUploadDecision",
    "OtherPartnersMatchState",
    "PartnerMatchState",
    "PhotoUploadAnalysis",
    "UploadContext",
    "UploadDecision",
    "UploadDecisionReason",
    "UploadDecisionType",
]
