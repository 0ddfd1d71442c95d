"""Tests for the OpenCV detection provider."""
import numpy as np
import pytest

from facematch.core.exceptions import ModelLoadError
from facematch.services.detection.opencv_sface import OpenCVDetectionProvider
from tests.conftest import encode_image


class FakeDetector:
    def __init__(self, faces):
        self.faces = faces
        self.input_size = None

    def setInputSize(self, size):
        self.input_size = size

    def detect(self, image):
        return 1, self.faces


class FakeRecognizer:
    def alignCrop(self, image, face):
        return np.zeros((112, 112, 3), dtype=np.uint8)

    def feature(self, aligned):
        return np.full((1, 128), 2.0, dtype=np.float32)


class TestOpenCVDetectionProvider:
    """Test suite for the YuNet + SFace provider."""

    async def test_missing_model_files_fail_to_load(self, tmp_path):
        """Should raise ModelLoadError when the ONNX files are absent."""
        provider = OpenCVDetectionProvider(
            detector_model_path=str(tmp_path / "yunet.onnx"),
            recognizer_model_path=str(tmp_path / "sface.onnx"),
        )

        with pytest.raises(ModelLoadError, match="YuNet detector model not found"):
            await provider.initialize()

        assert not provider.is_initialized
        assert "not found" in provider.error

    async def test_converts_detector_rows(self):
        """Should read boxes, landmarks and scores from YuNet rows."""
        row = np.array(
            [10, 20, 150, 170, 50, 60, 110, 60, 80, 90, 60, 130, 100, 130, 0.92],
            dtype=np.float32,
        )
        provider = OpenCVDetectionProvider(detector_model_path="unused", recognizer_model_path="unused")
        provider.detector = FakeDetector(np.array([row]))
        provider.recognizer = FakeRecognizer()
        provider._models_loaded = True

        result = await provider.detect_face(encode_image(320, 240))

        assert provider.detector.input_size == (320, 240)
        assert (result.bounding_box.x, result.bounding_box.y) == (10, 20)
        assert (result.bounding_box.width, result.bounding_box.height) == (150, 170)
        assert result.confidence == pytest.approx(0.92)
        assert len(result.descriptor) == 128
        assert np.linalg.norm(result.descriptor) == pytest.approx(1.0)
        assert [(p.x, p.y) for p in result.landmarks][0] == (50, 60)

    async def test_no_detections(self):
        """Should report no face when YuNet returns nothing."""
        provider = OpenCVDetectionProvider(detector_model_path="unused", recognizer_model_path="unused")
        provider.detector = FakeDetector(None)
        provider.recognizer = FakeRecognizer()
        provider._models_loaded = True

        result = await provider.detect_face(encode_image(320, 240))

        assert result.error == "No face detected"
