"""Photo upload evaluation service.

Ties the detection provider, the match finder and the decision resolver
together for the two upload flows. Photos are always supplied by the caller;
this service never reads or writes storage.
"""
from typing import Iterable, List, Mapping, Optional, Sequence

from facematch.core.config import settings
from facematch.core.exceptions import NoFaceDetectedError
from facematch.core.logging import get_logger
from facematch.domain.entities.face import FaceDescriptor
from facematch.domain.entities.photo import StoredPhoto
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.domain.value_objects.decision import NoPartnerUploadDecision, PhotoUploadAnalysis
from facematch.domain.value_objects.matching import FaceMatch
from facematch.services.face_matching import find_face_matches, split_photos_by_partner
from facematch.services.upload_decision import (
    analyze_photo_upload_for_partner,
    analyze_photo_upload_without_partner,
)

logger = get_logger(__name__)


def _has_descriptor(photos: Iterable[StoredPhoto]) -> bool:
    return any(photo.face_descriptor is not None for photo in photos)


def _with_partner_names(
    matches: List[FaceMatch],
    partner_names: Optional[Mapping[str, str]],
) -> List[FaceMatch]:
    if not partner_names:
        return matches
    return [
        match.model_copy(update={"partner_name": partner_names.get(match.partner_id)})
        for match in matches
    ]


class PhotoUploadService:
    """Evaluate a new photo against a user's existing partner photos.

    The same threshold is used for every match set within one evaluation, and
    matches are computed with the provider's own similarity function so that
    descriptors are compared the way the provider intends.

    Example:
        ```python
        provider = get_face_detection_provider()
        await provider.initialize()
        service = PhotoUploadService(provider)

        analysis = await service.detect_and_evaluate_for_partner(
            image_bytes, partner_id="p1", photos=user_photos
        )
        if analysis.decision.type is UploadDecisionType.WARN_OTHER_PARTNERS:
            ...
        ```
    """

    def __init__(self, provider: FaceDetectionProvider, threshold: Optional[float] = None) -> None:
        """Initialize the service.

        Args:
            provider: Initialized face detection provider
            threshold: Match threshold, defaults to ``FACE_MATCH_THRESHOLD``
        """
        self.provider = provider
        self.threshold = settings.FACE_MATCH_THRESHOLD if threshold is None else threshold

    def _find_matches(self, descriptor: Sequence[float], photos: List[StoredPhoto], threshold: float) -> List[FaceMatch]:
        return find_face_matches(
            descriptor,
            photos,
            threshold=threshold,
            similarity_fn=self.provider.calculate_similarity,
        )

    def evaluate_for_partner(
        self,
        descriptor: Sequence[float],
        partner_id: str,
        photos: Iterable[StoredPhoto],
        exclude_photo_id: Optional[str] = None,
        partner_names: Optional[Mapping[str, str]] = None,
        threshold: Optional[float] = None,
    ) -> PhotoUploadAnalysis:
        """Decide what to do with a photo uploaded to ``partner_id``.

        Args:
            descriptor: Descriptor of the uploaded photo's face
            partner_id: Partner the photo is being added to
            photos: All of the user's stored photos
            exclude_photo_id: Photo to ignore, e.g. the one being replaced
            partner_names: Partner display names to attach to matches
            threshold: Overrides the service threshold for this evaluation

        Returns:
            PhotoUploadAnalysis for the upload
        """
        threshold = self.threshold if threshold is None else threshold
        partner_photos, other_photos = split_photos_by_partner(photos, partner_id, exclude_photo_id)

        partner_matches = self._find_matches(descriptor, partner_photos, threshold)
        other_partner_matches = _with_partner_names(
            self._find_matches(descriptor, other_photos, threshold), partner_names
        )

        analysis = analyze_photo_upload_for_partner(
            partner_matches,
            other_partner_matches,
            partner_has_other_photos=_has_descriptor(partner_photos),
            other_partners_have_photos=_has_descriptor(other_photos),
        )
        logger.info(
            "Evaluated photo upload for partner",
            partner_id=partner_id,
            threshold=threshold,
            partner_matches=len(partner_matches),
            other_partner_matches=len(other_partner_matches),
            decision=analysis.decision.type.value,
            reason=analysis.decision.reason.value,
        )
        return analysis

    def evaluate_without_partner(
        self,
        descriptor: Sequence[float],
        photos: Iterable[StoredPhoto],
        partner_names: Optional[Mapping[str, str]] = None,
        threshold: Optional[float] = None,
    ) -> NoPartnerUploadDecision:
        """Decide whether a photo uploaded without a partner looks like a known one."""
        threshold = self.threshold if threshold is None else threshold
        matches = _with_partner_names(self._find_matches(descriptor, list(photos), threshold), partner_names)

        result = analyze_photo_upload_without_partner(matches)
        logger.info(
            "Evaluated photo upload without partner",
            threshold=threshold,
            matches=len(matches),
            decision=result.decision.value,
        )
        return result

    async def detect_descriptor(self, image_bytes: bytes) -> FaceDescriptor:
        """Detect the best face in an image and return its descriptor.

        Raises:
            NoFaceDetectedError: If the provider found no usable face
            ProviderError: If the provider failed
            InvalidImageError: If the image cannot be decoded
        """
        result = await self.provider.detect_face(image_bytes)
        if result.descriptor is None:
            logger.warning("No usable face in uploaded photo", reason=result.error)
            raise NoFaceDetectedError(
                result.error or "No face detected",
                details={"provider": self.provider.name},
            )
        return result.descriptor

    async def detect_and_evaluate_for_partner(
        self,
        image_bytes: bytes,
        partner_id: str,
        photos: Iterable[StoredPhoto],
        **kwargs,
    ) -> PhotoUploadAnalysis:
        """Detect the face in ``image_bytes`` and run ``evaluate_for_partner``."""
        descriptor = await self.detect_descriptor(image_bytes)
        return self.evaluate_for_partner(descriptor, partner_id, photos, **kwargs)

    async def detect_and_evaluate_without_partner(
        self,
        image_bytes: bytes,
        photos: Iterable[StoredPhoto],
        **kwargs,
    ) -> NoPartnerUploadDecision:
        """Detect the face in ``image_bytes`` and run ``evaluate_without_partner``."""
        descriptor = await self.detect_descriptor(image_bytes)
        return self.evaluate_without_partner(descriptor, photos, **kwargs)
