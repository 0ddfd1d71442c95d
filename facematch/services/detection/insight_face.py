"""
InsightFace-based face detection provider.

Wraps ``insightface.app.FaceAnalysis`` (RetinaFace detector + ArcFace
recognizer). Embeddings are 512-dimensional and normalized to unit length
before they leave the provider.

Example:
    ```python
    provider = InsightFaceDetectionProvider()
    await provider.initialize()

    with open("photo.jpg", "rb") as f:
        result = await provider.detect_face(f.read())
    ```

Note:
    This implementation uses CPU inference by default. For GPU support,
    pass 'CUDAExecutionProvider' in ``execution_providers``.
"""
from typing import List, Optional, Sequence

import numpy as np
from insightface.app import FaceAnalysis

from facematch.core.config import settings
from facematch.services.detection.base import BaseFaceDetectionProvider, RawFace


class InsightFaceDetectionProvider(BaseFaceDetectionProvider):
    """Face detection provider backed by InsightFace.

    Attributes:
        model: FaceAnalysis instance, None until ``initialize`` completes
    """

    name = "insightface"

    def __init__(
        self,
        model_name: Optional[str] = None,
        model_root: Optional[str] = None,
        det_size: Optional[int] = None,
        execution_providers: Sequence[str] = ("CPUExecutionProvider",),
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.model_name = model_name or settings.MODEL_NAME
        self.model_root = model_root or settings.MODEL_CACHE_DIR
        self.det_size = det_size or settings.DETECTION_SIZE
        self.execution_providers = list(execution_providers)
        self.model: Optional[FaceAnalysis] = None

    def _load_models(self) -> None:
        model = FaceAnalysis(
            name=self.model_name,
            root=self.model_root,
            providers=self.execution_providers,
        )
        # Detection size affects accuracy significantly
        model.prepare(ctx_id=0, det_size=(self.det_size, self.det_size))
        self.model = model

    def _run_model(self, image: np.ndarray) -> List[RawFace]:
        faces = self.model.get(image)
        raw_faces = []
        for face in faces or []:
            if face.embedding is None:
                continue
            x1, y1, x2, y2 = (float(v) for v in face.bbox)
            raw_faces.append(
                RawFace(
                    box=(x1, y1, x2 - x1, y2 - y1),
                    score=float(face.det_score),
                    embedding=face.embedding,
                    landmarks=getattr(face, "kps", None),
                )
            )
        return raw_faces
