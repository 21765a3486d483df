"""
Exceptions raised by the host layer (repository, importer, web).
The computation services never raise for well-typed input.
"""

from typing import Optional

from .entities import ValidationResult


class SalesMonitorError(Exception):
    """Base class for sales monitor errors."""
    pass


class ValidationFailedError(SalesMonitorError):
    """Raised when an entity fails business-rule validation."""

    def __init__(self, result: ValidationResult, message: Optional[str] = None):
        self.result = result
        if message is None:
            message = "; ".join(f"{e.field}: {e.message}" for e in result.errors)
        super().__init__(message)


class EntityNotFoundError(SalesMonitorError):
    """Raised when a store or product id does not exist in the snapshot."""
    pass


class InvalidCsvHeaderError(SalesMonitorError):
    """Raised when a store CSV does not start with the `name,level` header."""
    pass
