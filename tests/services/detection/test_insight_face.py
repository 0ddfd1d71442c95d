"""Tests for the InsightFace detection provider."""
from types import SimpleNamespace

import numpy as np
import pytest

pytest.importorskip("insightface")

from facematch.services.detection.insight_face import InsightFaceDetectionProvider  # noqa: E402
from tests.conftest import encode_image  # noqa: E402


class FakeFaceAnalysis:
    """Stands in for a prepared FaceAnalysis model."""

    def __init__(self, faces):
        self.faces = faces
        self.calls = 0

    def get(self, image):
        self.calls += 1
        return self.faces


def insight_face(bbox, score, embedding=None, kps=None):
    return SimpleNamespace(
        bbox=np.array(bbox, dtype=np.float32),
        det_score=np.float32(score),
        embedding=embedding if embedding is not None else np.ones(512, dtype=np.float32),
        kps=kps,
    )


@pytest.fixture
def provider():
    """Provide a provider with a fake model in place of the real weights."""
    service = InsightFaceDetectionProvider(model_name="buffalo_l", model_root="/tmp/models")
    service.model = FakeFaceAnalysis([])
    service._models_loaded = True
    return service


class TestInsightFaceDetectionProvider:
    """Test suite for the InsightFace provider."""

    def test_configuration(self):
        """Should read model settings without loading anything."""
        service = InsightFaceDetectionProvider(model_name="antelopev2", det_size=320)

        assert service.name == "insightface"
        assert service.model_name == "antelopev2"
        assert service.det_size == 320
        assert service.model is None
        assert not service.is_initialized

    async def test_converts_model_faces(self, provider):
        """Should convert corner boxes to x/y/width/height and normalize embeddings."""
        kps = np.array([[50, 60], [90, 60], [70, 80], [55, 100], [85, 100]], dtype=np.float32)
        provider.model = FakeFaceAnalysis([insight_face([20, 30, 220, 260], 0.88, kps=kps)])

        result = await provider.detect_face(encode_image(400, 400))

        assert result.bounding_box.x == 20
        assert result.bounding_box.y == 30
        assert result.bounding_box.width == 200
        assert result.bounding_box.height == 230
        assert result.confidence == pytest.approx(0.88)
        assert len(result.descriptor) == 512
        assert np.linalg.norm(result.descriptor) == pytest.approx(1.0)
        assert len(result.landmarks) == 5

    async def test_skips_faces_without_embeddings(self, provider):
        """Should ignore faces the recognizer did not embed."""
        face = insight_face([0, 0, 200, 200], 0.9)
        face.embedding = None
        provider.model = FakeFaceAnalysis([face])

        result = await provider.detect_all_faces(encode_image(400, 400))

        assert result.detections == []
        assert result.error is None
