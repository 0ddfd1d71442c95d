"""Similarity between face descriptors.

Descriptors are compared by Euclidean distance, which is then folded into a
bounded score: ``similarity = max(0, 1 - min(distance, 1))``. Identical
descriptors score 1 and anything at distance 1 or more scores 0, so every
threshold downstream works on the same 0-1 scale whatever the model.
"""
from typing import Sequence

import numpy as np


def calculate_face_similarity(descriptor1: Sequence[float], descriptor2: Sequence[float]) -> float:
    """Similarity score in [0, 1] between two descriptors.

    Descriptors of different lengths come from different models and cannot be
    compared; they score 0 instead of raising.

    Args:
        descriptor1: First face descriptor
        descriptor2: Second face descriptor

    Returns:
        float: 1.0 for identical descriptors, decreasing with distance
    """
    if len(descriptor1) != len(descriptor2):
        return 0.0

    diff = np.asarray(descriptor1, dtype=np.float64) - np.asarray(descriptor2, dtype=np.float64)
    distance = float(np.sqrt(np.dot(diff, diff)))

    if not np.isfinite(distance):
        return 0.0

    return max(0.0, 1.0 - min(distance, 1.0))
