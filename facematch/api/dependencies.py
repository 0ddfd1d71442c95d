"""FastAPI dependency providers."""
from fastapi import Depends, Request

from facematch.core.container import ServiceContainer
from facematch.core.exceptions import ServiceNotInitializedError
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.services.photo_upload import PhotoUploadService


def get_container(request: Request) -> ServiceContainer:
    """Return the container the lifespan handler stored on the app."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ServiceNotInitializedError("Service container not initialized")
    return container


def get_detection_provider(container: ServiceContainer = Depends(get_container)) -> FaceDetectionProvider:
    """Provide the initialized face detection provider.

    Raises:
        ServiceNotInitializedError: If the provider is not initialized
    """
    if container.detection_provider is None:
        raise ServiceNotInitializedError("Face detection provider not initialized")
    return container.detection_provider


def get_photo_upload_service(container: ServiceContainer = Depends(get_container)) -> PhotoUploadService:
    """Provide the photo upload evaluation service.

    Raises:
        ServiceNotInitializedError: If the service is not initialized
    """
    if container.photo_upload_service is None:
        raise ServiceNotInitializedError("Photo upload service not initialized")
    return container.photo_upload_service
