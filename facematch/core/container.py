"""Service container for dependency injection."""
from typing import Optional

from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.services.detection.factory import get_face_detection_provider
from facematch.services.photo_upload import PhotoUploadService


class ServiceContainer:
    """Container for application services.

    Holds the single detection provider chosen at startup and the services built
    on it. The FastAPI app keeps its container on ``app.state``.

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        service = container.photo_upload_service
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.detection_provider: Optional[FaceDetectionProvider] = None
        self.photo_upload_service: Optional[PhotoUploadService] = None

    async def initialize(self, provider: Optional[FaceDetectionProvider] = None) -> None:
        """Create the configured provider, load its models and build services.

        Args:
            provider: Use this provider instead of the configured one

        Raises:
            ModelLoadError: If the provider's models cannot be loaded
            UnknownProviderError: If the configured provider does not exist
        """
        self.detection_provider = provider or get_face_detection_provider()
        await self.detection_provider.initialize()
        self.photo_upload_service = PhotoUploadService(self.detection_provider)

    async def cleanup(self) -> None:
        """Drop service references in reverse order of initialization."""
        self.photo_upload_service = None
        self.detection_provider = None
