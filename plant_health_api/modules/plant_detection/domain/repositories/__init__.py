from .detection_repository import DetectionRepository

__all__ = ["DetectionRepository"]
