"""
Custom exception classes for the application.

The analysis core never raises; these are used by the store and dataset
layers only.
"""
from typing import Optional

from pharmref.constants import ErrorCodes


class PharmRefError(Exception):
    """Base exception for reference store errors."""

    def __init__(
        self,
        detail: str = "An error occurred",
        error_code: Optional[str] = ErrorCodes.INTERNAL_ERROR
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class DrugNotFoundError(PharmRefError):
    """Raised when a drug is not found."""

    def __init__(self, drug_id: str):
        super().__init__(
            detail=f"Drug '{drug_id}' not found",
            error_code=ErrorCodes.NOT_FOUND
        )
        self.drug_id = drug_id


class AlertRuleNotFoundError(PharmRefError):
    """Raised when an alert rule is not found."""

    def __init__(self, rule_id: str):
        super().__init__(
            detail=f"Alert rule '{rule_id}' not found",
            error_code=ErrorCodes.NOT_FOUND
        )
        self.rule_id = rule_id


class DuplicateRecordError(PharmRefError):
    """Raised when adding a record whose id already exists."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            detail=f"{kind} '{record_id}' already exists",
            error_code=ErrorCodes.DUPLICATE
        )
        self.record_id = record_id


class ValidationError(PharmRefError):
    """Raised when a record fails validation."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code=ErrorCodes.VALIDATION_ERROR)


class DatasetLoadError(PharmRefError):
    """Raised when the bundled or imported dataset cannot be read."""

    def __init__(self, detail: str = "Dataset could not be loaded"):
        super().__init__(detail=detail, error_code=ErrorCodes.DATASET_ERROR)
