"""Service interfaces package."""
from .detection import FaceDetectionProvider

__all__ = ["FaceDetectionProvider"]
