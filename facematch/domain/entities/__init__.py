"""Domain entities package."""
from .face import (
    BoundingBox,
    FaceDescriptor,
    FaceDetectionResult,
    LandmarkPosition,
    MultipleFaceDetectionResult,
)
from .photo import StoredPhoto

__all__ = [
    "BoundingBox",
    "FaceDescriptor",
    "FaceDetectionResult",
    "LandmarkPosition",
    "MultipleFaceDetectionResult",
    "StoredPhoto",
]
