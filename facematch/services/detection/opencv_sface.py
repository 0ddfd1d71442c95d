"""
OpenCV face detection provider.

Uses the YuNet detector (``cv2.FaceDetectorYN``) and the SFace recognizer
(``cv2.FaceRecognizerSF``) from OpenCV's model zoo. SFace produces 128-dimensional
features; they are normalized to unit length like every other provider's.

Both ONNX model files must be downloaded separately and configured through
``YUNET_MODEL_PATH`` and ``SFACE_MODEL_PATH``.
"""
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from facematch.core.config import settings
from facematch.services.detection.base import BaseFaceDetectionProvider, RawFace

# Low on purpose: confidence filtering happens in the base provider
DETECTOR_SCORE_THRESHOLD = 0.3
DETECTOR_NMS_THRESHOLD = 0.3
DETECTOR_TOP_K = 5000


class OpenCVDetectionProvider(BaseFaceDetectionProvider):
    """Face detection provider backed by OpenCV's YuNet and SFace models."""

    name = "opencv"

    def __init__(
        self,
        detector_model_path: Optional[str] = None,
        recognizer_model_path: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.detector_model_path = detector_model_path or settings.YUNET_MODEL_PATH
        self.recognizer_model_path = recognizer_model_path or settings.SFACE_MODEL_PATH
        self.detector = None
        self.recognizer = None

    def _load_models(self) -> None:
        for label, path in (
            ("YuNet detector", self.detector_model_path),
            ("SFace recognizer", self.recognizer_model_path),
        ):
            if not path or not Path(path).is_file():
                raise FileNotFoundError(f"{label} model not found at {path!r}")

        self.detector = cv2.FaceDetectorYN.create(
            self.detector_model_path,
            "",
            (320, 320),
            DETECTOR_SCORE_THRESHOLD,
            DETECTOR_NMS_THRESHOLD,
            DETECTOR_TOP_K,
        )
        self.recognizer = cv2.FaceRecognizerSF.create(self.recognizer_model_path, "")

    def _run_model(self, image: np.ndarray) -> List[RawFace]:
        height, width = image.shape[:2]
        self.detector.setInputSize((width, height))
        _, faces = self.detector.detect(image)
        if faces is None:
            return []

        raw_faces = []
        # Each row: x, y, w, h, five (x, y) landmarks, score
        for row in faces:
            aligned = self.recognizer.alignCrop(image, row)
            feature = self.recognizer.feature(aligned)
            raw_faces.append(
                RawFace(
                    box=(float(row[0]), float(row[1]), float(row[2]), float(row[3])),
                    score=float(row[14]),
                    embedding=np.asarray(feature).ravel(),
                    landmarks=np.asarray(row[4:14]).reshape(5, 2),
                )
            )
        return raw_faces
