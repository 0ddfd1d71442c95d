"""Shared fixtures for the face-match test suite."""
from typing import Any, List, Optional

import cv2
import numpy as np
import pytest

from facematch.domain.entities.face import (
    BoundingBox,
    FaceDescriptor,
    FaceDetectionResult,
    MultipleFaceDetectionResult,
)
from facematch.domain.entities.photo import StoredPhoto
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.domain.value_objects.matching import FaceMatch
from facematch.services.similarity import calculate_face_similarity

# Two-dimensional descriptors keep distances exact in binary floating point:
# against QUERY, (0.25, 0) scores 0.75, (0.5, 0) scores 0.5, (0.75, 0) scores 0.25.
QUERY: FaceDescriptor = (0.0, 0.0)


class FakeDetectionProvider(FaceDetectionProvider):
    """In-memory provider returning canned detection results."""

    name = "fake"

    def __init__(
        self,
        single: Optional[FaceDetectionResult] = None,
        multiple: Optional[MultipleFaceDetectionResult] = None,
        fail_with: Optional[Exception] = None,
    ) -> None:
        self.single = single or FaceDetectionResult.failed("No face detected")
        self.multiple = multiple or MultipleFaceDetectionResult()
        self.fail_with = fail_with
        self.initialize_calls = 0
        self.similarity_calls = 0
        self._initialized = False

    async def initialize(self) -> None:
        self.initialize_calls += 1
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_loading(self) -> bool:
        return False

    @property
    def error(self) -> Optional[str]:
        return None

    async def detect_face(self, image_bytes: bytes) -> FaceDetectionResult:
        if self.fail_with:
            raise self.fail_with
        return self.single

    async def detect_all_faces(self, image_bytes: bytes) -> MultipleFaceDetectionResult:
        if self.fail_with:
            raise self.fail_with
        return self.multiple

    def calculate_similarity(self, descriptor1, descriptor2) -> float:
        self.similarity_calls += 1
        return calculate_face_similarity(descriptor1, descriptor2)


def make_photo(photo_id: str, partner_id: str, descriptor: Any = None) -> StoredPhoto:
    return StoredPhoto(id=photo_id, partner_id=partner_id, face_descriptor=descriptor)


def make_match(photo_id: str = "photo-1", partner_id: str = "partner-1", similarity: float = 0.5) -> FaceMatch:
    return FaceMatch.from_similarity(photo_id=photo_id, partner_id=partner_id, similarity=similarity)


def encode_image(width: int, height: int, ext: str = ".png") -> bytes:
    ok, buffer = cv2.imencode(ext, np.zeros((height, width, 3), dtype=np.uint8))
    assert ok
    return buffer.tobytes()


def detected_face(descriptor: FaceDescriptor = (0.6, 0.8), confidence: float = 0.9) -> FaceDetectionResult:
    return FaceDetectionResult(
        descriptor=descriptor,
        bounding_box=BoundingBox(x=100, y=100, width=200, height=220),
        confidence=confidence,
        image_size=(800, 600),
    )


@pytest.fixture
def fake_provider() -> FakeDetectionProvider:
    return FakeDetectionProvider(single=detected_face())


@pytest.fixture
def image_bytes() -> bytes:
    return encode_image(640, 480)
