"""API models for face detection."""
from typing import List, Optional

from pydantic import BaseModel, Field

from facematch.domain.entities.face import BoundingBox, FaceDetectionResult, MultipleFaceDetectionResult
from facematch.services.face_quality import FaceQualityResult, validate_face_detection


class DetectedFace(BaseModel):
    """API model for one detected face."""
    descriptor: List[float] = Field(..., description="Face descriptor to store with the photo")
    bounding_box: BoundingBox = Field(..., description="Face bounding box in image pixels")
    confidence: float = Field(..., description="Detection confidence (0-1)", ge=0.0, le=1.0)
    quality: Optional[FaceQualityResult] = Field(None, description="Advisory face quality report")

    @classmethod
    def from_result(cls, result: FaceDetectionResult) -> "DetectedFace":
        """Convert a provider result that carries a face."""
        quality = None
        if result.image_size is not None:
            quality = validate_face_detection(
                result.bounding_box,
                result.image_size,
                landmarks=result.landmarks,
                confidence=result.confidence,
            )
        return cls(
            descriptor=list(result.descriptor),
            bounding_box=result.bounding_box,
            confidence=result.confidence,
            quality=quality,
        )


class FaceDetectionResponse(BaseModel):
    """Response model for the /detect endpoint."""
    detections: List[DetectedFace] = Field(default_factory=list, description="Usable faces found")
    error: Optional[str] = Field(None, description="Why no usable face was returned")
    filtered_count: int = Field(0, description="Faces dropped for being too small")
    warning: Optional[str] = Field(None, description="Non-fatal message about dropped faces")

    @classmethod
    def from_single(cls, result: FaceDetectionResult) -> "FaceDetectionResponse":
        if not result.has_face:
            return cls(error=result.error)
        return cls(detections=[DetectedFace.from_result(result)])

    @classmethod
    def from_multiple(cls, result: MultipleFaceDetectionResult) -> "FaceDetectionResponse":
        return cls(
            detections=[DetectedFace.from_result(detection) for detection in result.detections],
            error=result.error,
            filtered_count=result.filtered_count,
            warning=result.warning,
        )
