from .detection_repository_impl import DetectionRepositoryImpl
from .models import DetectionModel

__all__ = ["DetectionModel", "DetectionRepositoryImpl"]
