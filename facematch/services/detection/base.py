"""
Shared plumbing for face detection providers.

Concrete providers only load their models and run them on a decoded image.
This base class takes care of:
    - Idempotent model loading with loading/error state
    - Image decoding and downscaling (boxes are scaled back to original pixels)
    - Confidence and minimum size filtering
    - Descriptor normalization (unit length, so Euclidean similarity applies)
    - Serializing model calls, since the underlying runtimes are not reentrant
"""
import asyncio
from abc import abstractmethod
from typing import Any, List, NamedTuple, Optional, Tuple

import numpy as np

from facematch.core.config import settings
from facematch.core.exceptions import (
    InvalidImageError,
    ModelLoadError,
    ProviderError,
    ProviderNotInitializedError,
)
from facematch.core.logging import get_logger
from facematch.core.utils.image import bytes_to_numpy_array, downscale_to_max_dimension
from facematch.domain.entities.face import (
    BoundingBox,
    FaceDescriptor,
    FaceDetectionResult,
    LandmarkPosition,
    MultipleFaceDetectionResult,
)
from facematch.domain.interfaces.detection.face_detection import FaceDetectionProvider
from facematch.services.similarity import calculate_face_similarity

logger = get_logger(__name__)


class RawFace(NamedTuple):
    """A face as reported by a model, in the coordinates of the image it was given."""
    box: Tuple[float, float, float, float]  # x, y, width, height
    score: float
    embedding: np.ndarray
    landmarks: Optional[np.ndarray] = None  # (n, 2)


class BaseFaceDetectionProvider(FaceDetectionProvider):
    """Common behaviour for model-backed providers."""

    def __init__(
        self,
        max_dimension: Optional[int] = None,
        min_confidence: Optional[float] = None,
        min_face_size: Optional[int] = None,
    ) -> None:
        self.max_dimension = max_dimension or settings.DETECTION_MAX_DIMENSION
        self.min_confidence = min_confidence if min_confidence is not None else settings.MIN_FACE_CONFIDENCE
        self.min_face_size = min_face_size if min_face_size is not None else settings.MIN_FACE_SIZE

        self._models_loaded = False
        self._loading = False
        self._error: Optional[str] = None
        self._init_lock = asyncio.Lock()
        self._model_lock = asyncio.Lock()

    @abstractmethod
    def _load_models(self) -> None:
        """Load the models. Runs in a worker thread."""

    @abstractmethod
    def _run_model(self, image: np.ndarray) -> List[RawFace]:
        """Detect faces and compute embeddings on a BGR image. Runs in a worker thread."""

    @property
    def is_initialized(self) -> bool:
        return self._models_loaded

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    async def initialize(self) -> None:
        if self._models_loaded:
            return

        async with self._init_lock:
            if self._models_loaded:
                return

            self._loading = True
            self._error = None
            logger.info("Loading face detection models", provider=self.name)
            try:
                await asyncio.to_thread(self._load_models)
            except Exception as e:
                self._error = str(e) or "Failed to load models"
                logger.error(
                    "Face detection models failed to load",
                    provider=self.name,
                    error=self._error,
                    exc_info=True,
                )
                raise ModelLoadError(
                    f"Failed to load {self.name} models: {self._error}",
                    details={"provider": self.name},
                ) from e
            finally:
                self._loading = False

            self._models_loaded = True
            logger.info("Face detection models loaded", provider=self.name)

    def calculate_similarity(self, descriptor1: FaceDescriptor, descriptor2: FaceDescriptor) -> float:
        return calculate_face_similarity(descriptor1, descriptor2)

    def _ensure_initialized(self) -> None:
        if not self._models_loaded:
            raise ProviderNotInitializedError(
                "Models not loaded", details={"provider": self.name}
            )

    def _prepare_image(self, image_bytes: bytes) -> Tuple[np.ndarray, float, Tuple[int, int]]:
        try:
            img = bytes_to_numpy_array(image_bytes)
        except ValueError as e:
            logger.error("Image loading failed", provider=self.name, error=str(e))
            raise InvalidImageError(f"Invalid image format: {e}") from e

        height, width = img.shape[:2]
        resized, scale = downscale_to_max_dimension(img, self.max_dimension)
        if scale != 1.0:
            logger.debug(
                "Resized image for detection",
                original_size=(width, height),
                new_size=(resized.shape[1], resized.shape[0]),
            )
        return resized, scale, (width, height)

    async def _detect(self, image_bytes: bytes) -> Tuple[List[RawFace], float, Tuple[int, int]]:
        self._ensure_initialized()
        image, scale, image_size = self._prepare_image(image_bytes)

        async with self._model_lock:
            try:
                faces = await asyncio.to_thread(self._run_model, image)
            except Exception as e:
                logger.error(
                    "Face detection failed",
                    provider=self.name,
                    image_shape=image.shape,
                    error=str(e),
                    exc_info=True,
                )
                raise ProviderError(
                    f"Face detection failed: {e}", details={"provider": self.name}
                ) from e

        logger.debug("Face detection results", provider=self.name, faces_found=len(faces))
        return faces, scale, image_size

    @staticmethod
    def _normalize(embedding: Any) -> FaceDescriptor:
        vector = np.asarray(embedding, dtype=np.float64).ravel()
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return tuple(float(v) for v in vector)

    def _to_result(self, face: RawFace, scale: float, image_size: Tuple[int, int]) -> FaceDetectionResult:
        x, y, width, height = face.box
        landmarks = None
        if face.landmarks is not None:
            landmarks = [
                LandmarkPosition(x=float(px) * scale, y=float(py) * scale)
                for px, py in np.asarray(face.landmarks).reshape(-1, 2)
            ]
        return FaceDetectionResult(
            descriptor=self._normalize(face.embedding),
            bounding_box=BoundingBox(
                x=float(x) * scale,
                y=float(y) * scale,
                width=float(width) * scale,
                height=float(height) * scale,
            ),
            confidence=float(face.score),
            landmarks=landmarks,
            image_size=image_size,
        )

    def _face_size(self, face: RawFace, scale: float) -> float:
        _, _, width, height = face.box
        return min(width, height) * scale

    async def detect_face(self, image_bytes: bytes) -> FaceDetectionResult:
        faces, scale, image_size = await self._detect(image_bytes)
        if not faces:
            return FaceDetectionResult.failed("No face detected", image_size)

        best = max(faces, key=lambda face: face.score)

        if best.score < self.min_confidence:
            return FaceDetectionResult.failed(
                f"Face confidence too low ({best.score * 100:.0f}%). "
                f"Minimum {self.min_confidence * 100:.0f}% required.",
                image_size,
            )

        face_size = self._face_size(best, scale)
        if face_size < self.min_face_size:
            return FaceDetectionResult.failed(
                f"Face too small ({round(face_size)}px). "
                f"Minimum {self.min_face_size}px required for accurate recognition.",
                image_size,
            )

        return self._to_result(best, scale, image_size)

    async def detect_all_faces(self, image_bytes: bytes) -> MultipleFaceDetectionResult:
        faces, scale, image_size = await self._detect(image_bytes)

        confident = [face for face in faces if face.score >= self.min_confidence]
        large_enough = [face for face in confident if self._face_size(face, scale) >= self.min_face_size]
        filtered_count = len(confident) - len(large_enough)

        error = None
        if faces and not large_enough:
            if not confident:
                error = (
                    "Face(s) detected but confidence too low "
                    f"(minimum {self.min_confidence * 100:.0f}% required)"
                )
            else:
                error = f"Face(s) detected but too small (minimum {self.min_face_size}px required)"

        warning = None
        if filtered_count:
            plural = "s" if filtered_count > 1 else ""
            warning = f"{filtered_count} face{plural} could not be processed due to low resolution"
            logger.info(
                "Dropped faces below minimum size",
                provider=self.name,
                filtered_count=filtered_count,
            )

        return MultipleFaceDetectionResult(
            detections=[self._to_result(face, scale, image_size) for face in large_enough],
            error=error,
            filtered_count=filtered_count,
            warning=warning,
            image_size=image_size,
        )
