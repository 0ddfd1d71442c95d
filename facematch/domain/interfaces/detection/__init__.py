from .face_detection import FaceDetectionProvider

__all__ = ["FaceDetectionProvider"]
