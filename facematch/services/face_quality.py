"""Face quality validation.

A detector will happily return partial faces, tiny background faces and the odd
animal. These checks reject detections whose descriptor would not be reliable
enough to match against. All coordinates are in original image pixels.
"""
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from facematch.domain.entities.face import BoundingBox, LandmarkPosition


class FaceQualityConfig(BaseModel):
    """Thresholds a detection must satisfy."""
    min_pixel_size: float = 120
    min_face_area_percentage: float = 2.0
    min_relative_size: float = 5.0
    # Bottom halves of faces tend to be wider than 1.4, side slivers narrower than 0.75
    min_aspect_ratio: float = 0.75
    max_aspect_ratio: float = 1.4
    min_landmark_coverage: float = 0.5
    min_confidence: float = 0.65


class FaceQualityMetrics(BaseModel):
    pixel_size: float = Field(..., description="Smaller face dimension in pixels")
    face_area_percentage: float = Field(..., description="Face area as % of image area")
    relative_size: float = Field(..., description="Face size as % of the smaller image dimension")
    aspect_ratio: float = Field(..., description="Face width / height")
    landmark_coverage: Optional[float] = Field(None, description="How well landmarks span the face (0-1)")
    confidence: float = Field(0.0, description="Detection confidence (0-1)")


class FaceQualityResult(BaseModel):
    is_valid: bool
    metrics: FaceQualityMetrics
    reasons: List[str] = Field(default_factory=list)


def calculate_landmark_coverage(box: BoundingBox, landmarks: Sequence[LandmarkPosition]) -> float:
    """How much of the bounding box the landmarks span, penalized when off-center.

    Without landmarks the aspect ratio is the only hint: suspicious shapes get a
    low coverage so validation fails.
    """
    if not landmarks:
        aspect_ratio = box.width / box.height if box.height else 0.0
        if aspect_ratio > 1.3 or aspect_ratio < 0.8:
            return 0.4
        return 1.0

    xs = [point.x for point in landmarks]
    ys = [point.y for point in landmarks]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    width_coverage = (max_x - min_x) / box.width
    height_coverage = (max_y - min_y) / box.height

    center_x = box.x + box.width / 2
    center_y = box.y + box.height / 2
    x_offset = abs((min_x + max_x) / 2 - center_x) / box.width
    y_offset = abs((min_y + max_y) / 2 - center_y) / box.height

    skew_penalty = max(0.0, 1 - max(x_offset, y_offset) * 2)
    base_coverage = min(width_coverage, height_coverage)

    # Heavily skewed landmarks keep 70% of the base coverage
    return base_coverage * (0.7 + 0.3 * skew_penalty)


def calculate_face_quality_metrics(
    box: BoundingBox,
    image_size: Tuple[int, int],
    landmarks: Optional[Sequence[LandmarkPosition]] = None,
    confidence: Optional[float] = None,
) -> FaceQualityMetrics:
    """Measure a detection.

    Args:
        box: Face bounding box
        image_size: (width, height) of the original image
        landmarks: Facial landmarks, if the model produced them
        confidence: Detection confidence (0-1)
    """
    image_width, image_height = image_size
    min_face_dimension = min(box.width, box.height)

    return FaceQualityMetrics(
        pixel_size=min_face_dimension,
        face_area_percentage=(box.width * box.height) / (image_width * image_height) * 100,
        relative_size=min_face_dimension / min(image_width, image_height) * 100,
        aspect_ratio=box.width / box.height,
        landmark_coverage=(
            calculate_landmark_coverage(box, landmarks) if landmarks is not None else None
        ),
        confidence=confidence if confidence is not None else 0.0,
    )


def validate_face_quality(
    metrics: FaceQualityMetrics,
    config: Optional[FaceQualityConfig] = None,
) -> FaceQualityResult:
    """Check metrics against thresholds, collecting a reason for every failure."""
    cfg = config or FaceQualityConfig()
    reasons: List[str] = []

    if metrics.pixel_size < cfg.min_pixel_size:
        reasons.append(
            f"Face too small ({round(metrics.pixel_size)}px). "
            f"Minimum {cfg.min_pixel_size:g}px required."
        )

    if metrics.face_area_percentage < cfg.min_face_area_percentage:
        reasons.append(
            f"Face area too small ({metrics.face_area_percentage:.2f}% of image). "
            f"Minimum {cfg.min_face_area_percentage:g}% required."
        )

    if metrics.relative_size < cfg.min_relative_size:
        reasons.append(
            f"Face too small relative to image ({metrics.relative_size:.2f}% of smaller dimension). "
            f"Minimum {cfg.min_relative_size:g}% required."
        )

    if metrics.aspect_ratio < cfg.min_aspect_ratio:
        reasons.append(
            f"Face aspect ratio too narrow ({metrics.aspect_ratio:.2f}). "
            f"Minimum {cfg.min_aspect_ratio:g} required. This may be a partial face."
        )
    if metrics.aspect_ratio > cfg.max_aspect_ratio:
        reasons.append(
            f"Face aspect ratio too wide ({metrics.aspect_ratio:.2f}). "
            f"Maximum {cfg.max_aspect_ratio:g} required. This may be a partial face."
        )

    if metrics.landmark_coverage is not None and metrics.landmark_coverage < cfg.min_landmark_coverage:
        reasons.append(
            f"Landmark coverage insufficient ({metrics.landmark_coverage * 100:.1f}%). "
            f"Minimum {cfg.min_landmark_coverage * 100:.0f}% required."
        )

    if metrics.confidence < cfg.min_confidence:
        reasons.append(
            f"Face confidence too low ({metrics.confidence * 100:.0f}%). "
            f"Minimum {cfg.min_confidence * 100:.0f}% required."
        )

    return FaceQualityResult(is_valid=not reasons, metrics=metrics, reasons=reasons)


def validate_face_detection(
    box: BoundingBox,
    image_size: Tuple[int, int],
    landmarks: Optional[Sequence[LandmarkPosition]] = None,
    confidence: Optional[float] = None,
    config: Optional[FaceQualityConfig] = None,
) -> FaceQualityResult:
    """Measure and validate a detection in one step."""
    metrics = calculate_face_quality_metrics(box, image_size, landmarks, confidence)
    return validate_face_quality(metrics, config)
