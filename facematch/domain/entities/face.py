"""Core face domain entities."""
from typing import List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Ordered, fixed-length vector produced by one detection model.
FaceDescriptor = Tuple[float, ...]


def coerce_descriptor(value) -> FaceDescriptor:
    """Convert a numpy array or numeric sequence into an immutable descriptor."""
    if isinstance(value, np.ndarray):
        return tuple(float(v) for v in value.ravel())
    return tuple(float(v) for v in value)


class BoundingBox(BaseModel):
    """Face bounding box in original image pixels."""
    x: float = Field(..., description="Left coordinate of the bounding box")
    y: float = Field(..., description="Top coordinate of the bounding box")
    width: float = Field(..., description="Width of the bounding box")
    height: float = Field(..., description="Height of the bounding box")


class LandmarkPosition(BaseModel):
    """A single facial landmark in original image pixels."""
    x: float
    y: float


class FaceDetectionResult(BaseModel):
    """Outcome of looking for one face in an image.

    Either ``descriptor`` is set, or ``error`` explains why no usable face was found.
    """
    descriptor: Optional[FaceDescriptor] = Field(None, description="Face descriptor vector")
    bounding_box: Optional[BoundingBox] = Field(None, description="Bounding box of the face")
    confidence: Optional[float] = Field(None, description="Detection confidence (0-1)")
    landmarks: Optional[List[LandmarkPosition]] = Field(None, description="Facial landmarks, when the model provides them")
    image_size: Optional[Tuple[int, int]] = Field(None, description="(width, height) of the original image")
    error: Optional[str] = Field(None, description="Reason no usable face was returned")

    model_config = ConfigDict(frozen=True)

    @field_validator("descriptor", mode="before")
    @classmethod
    def validate_descriptor(cls, v):
        """Accept numpy arrays from the detection models."""
        if v is None:
            return None
        return coerce_descriptor(v)

    @property
    def has_face(self) -> bool:
        return self.descriptor is not None

    @classmethod
    def failed(cls, error: str, image_size: Optional[Tuple[int, int]] = None) -> "FaceDetectionResult":
        return cls(error=error, image_size=image_size)


class MultipleFaceDetectionResult(BaseModel):
    """Outcome of looking for every face in an image."""
    detections: List[FaceDetectionResult] = Field(default_factory=list, description="Usable faces")
    error: Optional[str] = Field(None, description="Reason no usable face was returned")
    filtered_count: int = Field(0, description="Faces dropped for being too small")
    warning: Optional[str] = Field(None, description="Non-fatal message about dropped faces")
    image_size: Optional[Tuple[int, int]] = Field(None, description="(width, height) of the original image")
