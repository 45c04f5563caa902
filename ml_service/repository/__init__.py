from .detection_repository import InMemoryDetectionRepository

__all__ = ["InMemoryDetectionRepository"]
