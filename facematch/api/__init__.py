"""API v1 router initialization."""
from fastapi import APIRouter

from .face_detection import router as face_detection_router
from .photo_uploads import router as photo_uploads_router

router = APIRouter()

router.include_router(
    face_detection_router,
    prefix="/face-detection",
    tags=["face-detection"]
)
router.include_router(
    photo_uploads_router,
    prefix="/photo-uploads",
    tags=["photo-uploads"]
)
