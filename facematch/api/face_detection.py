"""Face detection API endpoints."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from facematch.api.dependencies import get_detection_provider
from facematch.api.models.detection import FaceDetectionResponse
from facematch.core.exceptions import InvalidImageError, ModelLoadError, ProviderError, ProviderNotInitializedError
from facematch.core.logging import get_logger
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider

logger = get_logger(__name__)
router = APIRouter(
    responses={
        400: {"description": "Invalid image"},
        503: {"description": "Detection models unavailable"},
    }
)


@router.post(
    "/detect",
    response_model=FaceDetectionResponse,
    summary="Detect faces in an image",
    description="Returns face descriptors for matching. By default only the best face is returned.",
)
async def detect_faces(
    image: UploadFile = File(..., description="JPEG or PNG image"),
    detect_all: bool = False,
    provider: FaceDetectionProvider = Depends(get_detection_provider),
) -> FaceDetectionResponse:
    """Detect faces in an uploaded image.

    Args:
        image: Uploaded image file
        detect_all: Return every usable face instead of the best one
        provider: Face detection provider from dependency injection

    Raises:
        HTTPException: If the image is invalid or detection fails
    """
    image_bytes = await image.read()
    try:
        if detect_all:
            return FaceDetectionResponse.from_multiple(await provider.detect_all_faces(image_bytes))
        return FaceDetectionResponse.from_single(await provider.detect_face(image_bytes))

    except InvalidImageError as e:
        logger.error("Invalid image format", error=str(e), filename=image.filename)
        raise HTTPException(status_code=400, detail="Invalid image format. Only JPEG and PNG are supported.")
    except (ModelLoadError, ProviderNotInitializedError) as e:
        logger.error("Detection models unavailable", error=str(e))
        raise HTTPException(status_code=503, detail="Face detection models are not loaded")
    except ProviderError as e:
        logger.error("Face detection failed", error=str(e))
        raise HTTPException(status_code=500, detail="Face detection failed")
