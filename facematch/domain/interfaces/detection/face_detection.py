"""Face detection provider interface."""
from abc import ABC, abstractmethod
from typing import Optional

from ...entities.face import FaceDescriptor, FaceDetectionResult, MultipleFaceDetectionResult


class FaceDetectionProvider(ABC):
    """Interface for a face detection backend.

    A provider turns image bytes into face descriptors. Different providers wrap
    different models, and descriptors are only comparable when they come from the
    same provider.
    """

    name: str = "base"

    @abstractmethod
    async def initialize(self) -> None:
        """
        Load the detection models.

        Safe to call more than once; later calls return immediately.

        Raises:
            ModelLoadError: If the models cannot be loaded
        """
        pass

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Whether the models are loaded."""
        pass

    @property
    @abstractmethod
    def is_loading(self) -> bool:
        """Whether a model load is in progress."""
        pass

    @property
    @abstractmethod
    def error(self) -> Optional[str]:
        """Message from the last failed model load, if any."""
        pass

    @abstractmethod
    async def detect_face(self, image_bytes: bytes) -> FaceDetectionResult:
        """
        Detect the single best face in the provided image.

        Args:
            image_bytes: Raw image data

        Returns:
            FaceDetectionResult with a descriptor, or with ``error`` set when no
            usable face was found

        Raises:
            ProviderNotInitializedError: If ``initialize`` has not completed
            InvalidImageError: If the image cannot be decoded
        """
        pass

    @abstractmethod
    async def detect_all_faces(self, image_bytes: bytes) -> MultipleFaceDetectionResult:
        """
        Detect every usable face in the provided image.

        Args:
            image_bytes: Raw image data

        Returns:
            MultipleFaceDetectionResult with zero or more detections

        Raises:
            ProviderNotInitializedError: If ``initialize`` has not completed
            InvalidImageError: If the image cannot be decoded
        """
        pass

    @abstractmethod
    def calculate_similarity(self, descriptor1: FaceDescriptor, descriptor2: FaceDescriptor) -> float:
        """
        Similarity between two descriptors from this provider.

        Returns:
            Score in [0, 1], where 1 means identical descriptors
        """
        pass
