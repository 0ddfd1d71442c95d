"""Factory for face detection providers."""
from typing import Optional

from facematch.core.config import settings
from facematch.core.exceptions import UnknownProviderError
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider

PROVIDER_TYPES = ("insightface", "opencv")


def create_face_detection_provider(provider_type: str = "insightface") -> FaceDetectionProvider:
    """Create an uninitialized provider by name.

    Backends are imported on demand so a deployment only needs the libraries of
    the provider it actually runs.

    Raises:
        UnknownProviderError: If no provider is registered under ``provider_type``
    """
    if provider_type == "insightface":
        from facematch.services.detection.insight_face import InsightFaceDetectionProvider
        return InsightFaceDetectionProvider()

    if provider_type == "opencv":
        from facematch.services.detection.opencv_sface import OpenCVDetectionProvider
        return OpenCVDetectionProvider()

    raise UnknownProviderError(
        f"Unknown face detection provider: {provider_type}",
        details={"provider": provider_type, "available": list(PROVIDER_TYPES)},
    )


def get_face_detection_provider(provider_type: Optional[str] = None) -> FaceDetectionProvider:
    """Create the provider named by ``FACE_DETECTION_PROVIDER`` unless one is given."""
    return create_face_detection_provider(provider_type or settings.FACE_DETECTION_PROVIDER)
