"""Tests for face quality validation."""
import pytest

from facematch.domain.entities.face import BoundingBox, LandmarkPosition
from facematch.services.face_quality import (
    FaceQualityConfig,
    calculate_face_quality_metrics,
    calculate_landmark_coverage,
    validate_face_detection,
    validate_face_quality,
)

IMAGE_SIZE = (1000, 800)
GOOD_BOX = BoundingBox(x=400, y=300, width=200, height=220)


class TestFaceQualityMetrics:
    """Test suite for measuring detections."""

    def test_metrics(self):
        """Should compute size, area and aspect ratio."""
        metrics = calculate_face_quality_metrics(GOOD_BOX, IMAGE_SIZE, confidence=0.9)

        assert metrics.pixel_size == 200
        assert metrics.face_area_percentage == pytest.approx(200 * 220 / (1000 * 800) * 100)
        assert metrics.relative_size == pytest.approx(25.0)
        assert metrics.aspect_ratio == pytest.approx(200 / 220)
        assert metrics.landmark_coverage is None
        assert metrics.confidence == 0.9

    def test_missing_confidence_defaults_to_zero(self):
        """Should treat a missing confidence as zero."""
        assert calculate_face_quality_metrics(GOOD_BOX, IMAGE_SIZE).confidence == 0.0


class TestLandmarkCoverage:
    """Test suite for landmark coverage."""

    def test_centered_landmarks(self):
        """Should not penalize landmarks centered in the box."""
        box = BoundingBox(x=0, y=0, width=100, height=100)
        landmarks = [LandmarkPosition(x=20, y=20), LandmarkPosition(x=80, y=80)]

        assert calculate_landmark_coverage(box, landmarks) == pytest.approx(0.6)

    def test_skewed_landmarks_are_penalized(self):
        """Should reduce coverage when landmarks sit in one corner."""
        box = BoundingBox(x=0, y=0, width=100, height=100)
        centered = [LandmarkPosition(x=20, y=20), LandmarkPosition(x=80, y=80)]
        skewed = [LandmarkPosition(x=40, y=40), LandmarkPosition(x=100, y=100)]

        assert calculate_landmark_coverage(box, skewed) < calculate_landmark_coverage(box, centered)

    def test_no_landmarks_uses_aspect_ratio(self):
        """Should fall back to the box shape without landmarks."""
        assert calculate_landmark_coverage(BoundingBox(x=0, y=0, width=100, height=100), []) == 1.0
        assert calculate_landmark_coverage(BoundingBox(x=0, y=0, width=150, height=100), []) == 0.4


class TestValidateFaceQuality:
    """Test suite for validating detections."""

    def test_good_face_is_valid(self):
        """Should accept a large, well proportioned, confident face."""
        result = validate_face_detection(GOOD_BOX, IMAGE_SIZE, confidence=0.95)

        assert result.is_valid
        assert result.reasons == []

    def test_small_face_rejected(self):
        """Should explain why a tiny face is rejected."""
        box = BoundingBox(x=0, y=0, width=30, height=33)

        result = validate_face_detection(box, IMAGE_SIZE, confidence=0.95)

        assert not result.is_valid
        assert "Face too small (30px). Minimum 120px required." in result.reasons
        assert any(reason.startswith("Face area too small") for reason in result.reasons)
        assert any(reason.startswith("Face too small relative to image") for reason in result.reasons)

    def test_partial_face_aspect_ratios(self):
        """Should flag boxes that are too narrow or too wide."""
        narrow = validate_face_detection(BoundingBox(x=0, y=0, width=150, height=300), IMAGE_SIZE, confidence=0.9)
        wide = validate_face_detection(BoundingBox(x=0, y=0, width=300, height=150), IMAGE_SIZE, confidence=0.9)

        assert any("too narrow" in reason for reason in narrow.reasons)
        assert any("too wide" in reason for reason in wide.reasons)

    def test_low_confidence_rejected(self):
        """Should reject detections below the confidence threshold."""
        result = validate_face_detection(GOOD_BOX, IMAGE_SIZE, confidence=0.5)

        assert result.reasons == ["Face confidence too low (50%). Minimum 65% required."]

    def test_low_landmark_coverage_rejected(self):
        """Should reject landmarks that cover too little of the face."""
        landmarks = [LandmarkPosition(x=480, y=390), LandmarkPosition(x=520, y=430)]

        result = validate_face_detection(GOOD_BOX, IMAGE_SIZE, landmarks=landmarks, confidence=0.9)

        assert not result.is_valid
        assert result.reasons[0].startswith("Landmark coverage insufficient")

    def test_custom_config(self):
        """Should apply caller supplied thresholds."""
        metrics = calculate_face_quality_metrics(GOOD_BOX, IMAGE_SIZE, confidence=0.9)

        result = validate_face_quality(metrics, FaceQualityConfig(min_pixel_size=250, min_confidence=0.95))

        assert len(result.reasons) == 2
