"""
Image processing utility functions.
"""
from typing import Tuple

import cv2
import numpy as np


def bytes_to_numpy_array(image_bytes: bytes, flags: int = cv2.IMREAD_COLOR) -> np.ndarray:
    """Convert image bytes to a numpy array.

    Args:
        image_bytes: Raw image bytes
        flags: OpenCV imread flags (default: COLOR)

    Returns:
        numpy.ndarray: Image as a numpy array

    Raises:
        ValueError: If the image cannot be decoded
    """
    np_array = np.frombuffer(image_bytes, np.uint8)

    img = cv2.imdecode(np_array, flags) if np_array.size else None

    if img is None:
        raise ValueError("Failed to decode image bytes")

    return img


def downscale_to_max_dimension(image: np.ndarray, max_dimension: int) -> Tuple[np.ndarray, float]:
    """Shrink an image so its longest side is at most ``max_dimension``.

    Args:
        image: Image array (height, width, channels)
        max_dimension: Longest allowed side in pixels

    Returns:
        Tuple of (possibly resized image, scale factor from resized back to original)
    """
    height, width = image.shape[:2]
    if width <= max_dimension and height <= max_dimension:
        return image, 1.0

    scale = min(max_dimension / width, max_dimension / height)
    new_width = max(1, round(width * scale))
    new_height = max(1, round(height * scale))
    resized = cv2.resize(image, (new_width, new_height), interpolation=cv2.INTER_AREA)
    return resized, width / new_width
