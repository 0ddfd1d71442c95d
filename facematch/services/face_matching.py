"""Match a new face descriptor against stored partner photos."""
import json
from numbers import Real
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from facematch.core.logging import get_logger
from facematch.domain.entities.face import FaceDescriptor
from facematch.domain.entities.photo import StoredPhoto
from facematch.domain.value_objects.matching import FaceMatch
from facematch.services.similarity import calculate_face_similarity

logger = get_logger(__name__)

# Similarity 0.4 == Euclidean distance 0.6
DEFAULT_MATCH_THRESHOLD = 0.4

SimilarityFn = Callable[[Sequence[float], Sequence[float]], float]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_face_descriptor(raw: Any, photo_id: Optional[str] = None) -> Optional[FaceDescriptor]:
    """Normalize a stored descriptor into a numeric tuple.

    Rows may hold the descriptor as an array or as its JSON string. Anything that
    does not turn into a flat sequence of numbers is logged and rejected.

    Args:
        raw: Descriptor as stored
        photo_id: Photo the descriptor belongs to, for diagnostics

    Returns:
        The descriptor, or None if it could not be used
    """
    if raw is None:
        return None

    value = raw
    if isinstance(raw, (str, bytes)):
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Failed to parse face descriptor", photo_id=photo_id, error=str(e))
            return None

    if isinstance(value, np.ndarray):
        value = value.tolist()

    if not isinstance(value, (list, tuple)):
        logger.warning(
            "Invalid face descriptor type",
            photo_id=photo_id,
            descriptor_type=type(value).__name__,
        )
        return None

    if not all(_is_number(v) for v in value):
        logger.warning("Face descriptor contains non-numeric values", photo_id=photo_id)
        return None

    try:
        return tuple(float(v) for v in value)
    except (OverflowError, ValueError) as e:
        logger.warning("Face descriptor contains non-numeric values", photo_id=photo_id, error=str(e))
        return None


def is_face_match(similarity: float, threshold: float = DEFAULT_MATCH_THRESHOLD) -> bool:
    """Check if a similarity score counts as a match."""
    return similarity >= threshold


def find_face_matches(
    query: Sequence[float],
    photos: Iterable[StoredPhoto],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    similarity_fn: Optional[SimilarityFn] = None,
) -> List[FaceMatch]:
    """Find stored photos whose face matches the query descriptor.

    Photos without a descriptor are skipped, as are photos whose descriptor cannot
    be parsed or has a different length than the query; one bad row never stops
    the rest from being evaluated.

    Args:
        query: Descriptor of the new photo
        photos: Stored photos to compare against
        threshold: Minimum similarity for a match (0.0 to 1.0)
        similarity_fn: Provider-specific similarity, defaults to the Euclidean one

    Returns:
        Matches sorted by similarity, highest first; equal scores keep input order
    """
    compare = similarity_fn or calculate_face_similarity
    matches: List[FaceMatch] = []

    for photo in photos:
        if photo.face_descriptor is None:
            continue

        descriptor = parse_face_descriptor(photo.face_descriptor, photo_id=photo.id)
        if descriptor is None:
            continue

        if len(descriptor) != len(query):
            logger.warning(
                "Face descriptor length mismatch",
                photo_id=photo.id,
                expected=len(query),
                actual=len(descriptor),
            )
            continue

        similarity = compare(query, descriptor)
        if is_face_match(similarity, threshold):
            matches.append(
                FaceMatch.from_similarity(
                    photo_id=photo.id,
                    partner_id=photo.partner_id,
                    similarity=similarity,
                )
            )

    # sorted() is stable, reverse=True keeps input order among equal scores
    return sorted(matches, key=lambda match: match.similarity, reverse=True)


def split_photos_by_partner(
    photos: Iterable[StoredPhoto],
    partner_id: str,
    exclude_photo_id: Optional[str] = None,
) -> Tuple[List[StoredPhoto], List[StoredPhoto]]:
    """Partition a user's photos into the target partner's and everyone else's.

    Args:
        photos: All of the user's stored photos
        partner_id: Partner the upload targets
        exclude_photo_id: Photo to leave out, e.g. the one being replaced

    Returns:
        Tuple of (partner photos, other partners' photos)
    """
    partner_photos: List[StoredPhoto] = []
    other_photos: List[StoredPhoto] = []
    for photo in photos:
        if exclude_photo_id is not None and photo.id == exclude_photo_id:
            continue
        if photo.partner_id == partner_id:
            partner_photos.append(photo)
        else:
            other_photos.append(photo)
    return partner_photos, other_photos
