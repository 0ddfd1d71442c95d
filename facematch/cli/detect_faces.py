"""CLI tool that prints face descriptors for an image."""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from facematch.core.exceptions import FaceMatchError
from facematch.core.logging import get_logger, setup_logging
from facematch.services.detection.factory import PROVIDER_TYPES, get_face_detection_provider

logger = get_logger(__name__)


async def detect_faces(image_path: str, detect_all: bool = False, provider_type: Optional[str] = None) -> int:
    """
    Detect faces in the given image and print their descriptors as JSON.

    Args:
        image_path: Path to the image file
        detect_all: Report every usable face instead of the best one
        provider_type: Provider name, defaults to the configured one

    Returns:
        Process exit code
    """
    image_file = Path(image_path)
    if not image_file.exists():
        logger.error("Image file not found", path=image_path)
        return 1

    image_bytes = image_file.read_bytes()

    try:
        provider = get_face_detection_provider(provider_type)
        await provider.initialize()

        if detect_all:
            result = await provider.detect_all_faces(image_bytes)
            detections = result.detections
            error = result.error
            if result.warning:
                logger.warning(result.warning, filtered_count=result.filtered_count)
        else:
            single = await provider.detect_face(image_bytes)
            detections = [single] if single.has_face else []
            error = single.error
    except FaceMatchError as e:
        logger.error("Face detection failed", error=str(e), details=e.details)
        return 1

    logger.info(
        "Face detection completed",
        provider=provider.name,
        num_faces=len(detections),
        image_path=image_path,
    )
    for i, face in enumerate(detections, 1):
        logger.info(
            f"Face {i} details",
            confidence=f"{face.confidence:.2f}",
            position={
                "x": round(face.bounding_box.x),
                "y": round(face.bounding_box.y),
                "width": round(face.bounding_box.width),
                "height": round(face.bounding_box.height),
            },
        )

    if not detections:
        logger.warning("No usable face found", reason=error)

    print(json.dumps([list(face.descriptor) for face in detections]))
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Print face descriptors for an image")
    parser.add_argument("image_path", help="Path to the image file")
    parser.add_argument(
        "--all",
        action="store_true",
        dest="detect_all",
        help="Report every usable face instead of the best one"
    )
    parser.add_argument(
        "--provider",
        choices=PROVIDER_TYPES,
        default=None,
        help="Detection provider (defaults to FACE_DETECTION_PROVIDER)"
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(detect_faces(args.image_path, args.detect_all, args.provider)))


if __name__ == "__main__":
    main()
