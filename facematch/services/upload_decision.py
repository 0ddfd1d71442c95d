"""Decide what to do with a photo upload from its face matches.

Uploading to a specific partner resolves two independent states and looks the
pair up in ``DECISION_TABLE``:

    partner state \\ others state | no_photos | no_match | match
    ------------------------------+-----------+----------+---------------------
    no_photos                     | proceed   | proceed  | warn_other_partners
    match                         | proceed   | proceed  | warn_other_partners
    no_match                      | warn_same | warn_same| warn_other_partners

A match against another partner always wins: confusing two tracked people is
worse than a photo that does not look like the partner's earlier ones.

Uploading without a partner only asks whether anything matched at all.
"""
from typing import Dict, List, Mapping, Tuple

from facematch.core.logging import get_logger
from facematch.domain.value_objects.decision import (
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
from facematch.domain.value_objects.matching import FaceMatch

logger = get_logger(__name__)

StatePair = Tuple[PartnerMatchState, OtherPartnersMatchState]
Outcome = Tuple[UploadDecisionType, UploadDecisionReason]

_PROCEED_NO_MATCHES: Outcome = (UploadDecisionType.PROCEED, UploadDecisionReason.NO_MATCHES)
_PROCEED_MATCHES_PARTNER: Outcome = (
    UploadDecisionType.PROCEED,
    UploadDecisionReason.MATCHES_PARTNER_OR_NO_PHOTOS,
)
_WARN_SAME_PERSON: Outcome = (
    UploadDecisionType.WARN_SAME_PERSON,
    UploadDecisionReason.DOESNT_MATCH_PARTNER_HAS_PHOTOS,
)
_WARN_OTHER_PARTNERS: Outcome = (
    UploadDecisionType.WARN_OTHER_PARTNERS,
    UploadDecisionReason.MATCHES_OTHER_PARTNERS,
)

DECISION_TABLE: Dict[StatePair, Outcome] = {
    (PartnerMatchState.NO_PHOTOS, OtherPartnersMatchState.NO_PHOTOS): _PROCEED_NO_MATCHES,
    (PartnerMatchState.NO_PHOTOS, OtherPartnersMatchState.NO_MATCH): _PROCEED_NO_MATCHES,
    (PartnerMatchState.NO_PHOTOS, OtherPartnersMatchState.MATCH): _WARN_OTHER_PARTNERS,
    (PartnerMatchState.MATCH, OtherPartnersMatchState.NO_PHOTOS): _PROCEED_MATCHES_PARTNER,
    (PartnerMatchState.MATCH, OtherPartnersMatchState.NO_MATCH): _PROCEED_MATCHES_PARTNER,
    (PartnerMatchState.MATCH, OtherPartnersMatchState.MATCH): _WARN_OTHER_PARTNERS,
    (PartnerMatchState.NO_MATCH, OtherPartnersMatchState.NO_PHOTOS): _WARN_SAME_PERSON,
    (PartnerMatchState.NO_MATCH, OtherPartnersMatchState.NO_MATCH): _WARN_SAME_PERSON,
    (PartnerMatchState.NO_MATCH, OtherPartnersMatchState.MATCH): _WARN_OTHER_PARTNERS,
}


def resolve_partner_match_state(
    partner_matches: List[FaceMatch],
    partner_has_other_photos: bool,
) -> PartnerMatchState:
    """State of the new photo against the target partner's own photos."""
    if not partner_has_other_photos:
        return PartnerMatchState.NO_PHOTOS
    if partner_matches:
        return PartnerMatchState.MATCH
    return PartnerMatchState.NO_MATCH


def resolve_other_partners_match_state(
    other_partner_matches: List[FaceMatch],
    other_partners_have_photos: bool,
) -> OtherPartnersMatchState:
    """State of the new photo against every other partner's photos."""
    if other_partner_matches:
        return OtherPartnersMatchState.MATCH
    if not other_partners_have_photos:
        return OtherPartnersMatchState.NO_PHOTOS
    return OtherPartnersMatchState.NO_MATCH


def decide(
    partner_state: PartnerMatchState,
    other_partners_state: OtherPartnersMatchState,
    other_partner_matches: List[FaceMatch],
    table: Mapping[StatePair, Outcome] = DECISION_TABLE,
) -> UploadDecision:
    """Map a resolved state pair to a decision.

    A pair missing from ``table`` cannot happen with the full table; it falls back
    to ``proceed`` so matching never blocks an upload.
    """
    outcome = table.get((partner_state, other_partners_state))
    if outcome is None:
        logger.warning(
            "Unmapped upload decision state, proceeding",
            partner_state=partner_state.value,
            other_partners_state=other_partners_state.value,
        )
        outcome = _PROCEED_NO_MATCHES

    decision_type, reason = outcome
    if decision_type is UploadDecisionType.WARN_OTHER_PARTNERS:
        return UploadDecision(type=decision_type, reason=reason, matches=other_partner_matches)
    return UploadDecision(type=decision_type, reason=reason)


def analyze_photo_upload_for_partner(
    partner_matches: List[FaceMatch],
    other_partner_matches: List[FaceMatch],
    partner_has_other_photos: bool,
    other_partners_have_photos: bool = False,
) -> PhotoUploadAnalysis:
    """Analyze an upload that targets a specific partner.

    Args:
        partner_matches: Matches against the partner's existing photos
        other_partner_matches: Matches against other partners' photos
        partner_has_other_photos: Whether the partner already has photos
        other_partners_have_photos: Whether any other partner has photos

    Returns:
        PhotoUploadAnalysis with the decision and the inputs it came from
    """
    partner_state = resolve_partner_match_state(partner_matches, partner_has_other_photos)
    other_partners_state = resolve_other_partners_match_state(
        other_partner_matches, other_partners_have_photos
    )
    decision = decide(partner_state, other_partners_state, other_partner_matches)

    return PhotoUploadAnalysis(
        decision=decision,
        partner_state=partner_state,
        other_partners_state=other_partners_state,
        partner_matches=partner_matches,
        other_partner_matches=other_partner_matches,
        partner_has_other_photos=partner_has_other_photos,
    )


def analyze_upload_context(context: UploadContext) -> PhotoUploadAnalysis:
    """Same as ``analyze_photo_upload_for_partner`` for a bundled context."""
    return analyze_photo_upload_for_partner(
        context.partner_matches,
        context.other_partner_matches,
        context.partner_has_other_photos,
        context.other_partners_have_photos,
    )


def analyze_photo_upload_without_partner(all_partner_matches: List[FaceMatch]) -> NoPartnerUploadDecision:
    """Analyze an upload made before a partner was picked.

    No match means the face is new and a partner can be created for it; any
    match is handed back so the user can choose.
    """
    if not all_partner_matches:
        return NoPartnerUploadDecision(decision=NoPartnerDecisionType.CREATE_NEW)

    return NoPartnerUploadDecision(
        decision=NoPartnerDecisionType.WARN_MATCHES,
        matches=all_partner_matches,
    )
