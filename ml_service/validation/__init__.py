from .reading_validator import (
    ReadingValidator,
    ValidationReport,
    ValidationResult,
    ValidationSummary,
)

__all__ = ["ReadingValidator", "ValidationReport", "ValidationResult", "ValidationSummary"]
