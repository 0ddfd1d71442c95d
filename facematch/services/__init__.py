"""Face matching services."""
from .face_matching import (
    DEFAULT_MATCH_THRESHOLD,
    find_face_matches,
    is_face_match,
    parse_face_descriptor,
    split_photos_by_partner,
)
from .similarity import calculate_face_similarity
from .upload_decision import (
    analyze_photo_upload_for_partner,
    analyze_photo_upload_without_partner,
    analyze_upload_context,
)

__all__ = [
    "DEFAULT_MATCH_THRESHOLD",
    "analyze_photo_upload_for_partner",
    "analyze_photo_upload_without_partner",
    "analyze_upload_context",
    "calculate_face_similarity",
    "find_face_matches",
    "is_face_match",
    "parse_face_descriptor",
    "split_photos_by_partner",
]
