from .fault_detection_service import FaultDetectionService

__all__ = ["FaultDetectionService"]
