"""Custom exceptions for the face-match service."""
from typing import Optional


class FaceMatchError(Exception):
    """Base exception for face-match operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize face-match error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidImageError(FaceMatchError):
    """Raised when the provided image is invalid or cannot be processed."""
    pass


class NoFaceDetectedError(FaceMatchError):
    """Raised when no usable face is detected in the image."""
    pass


class ProviderError(FaceMatchError):
    """Base exception for face detection provider failures."""
    pass


class ModelLoadError(ProviderError):
    """Raised when the detection models fail to load."""
    pass


class ProviderNotInitializedError(ProviderError):
    """Raised when detection is requested before the models are loaded."""
    pass


class UnknownProviderError(ProviderError):
    """Raised when the configured provider name has no implementation."""
    pass


class ServiceNotInitializedError(FaceMatchError):
    """Raised when a service is requested from an uninitialized container."""
    pass
