"""Exception hierarchy for atsbuilder."""

from typing import List, Optional


class AtsBuilderError(Exception):
    """Base class for all atsbuilder errors."""
    pass


class InvalidArgumentError(AtsBuilderError, ValueError):
    """Raised when an input is missing, undefined or structurally invalid."""

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.details = list(details or [])

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        return base + ": " + "; ".join(self.details)


class FetchError(AtsBuilderError):
    """Raised when a job posting cannot be retrieved."""
    pass


class RetryError(AtsBuilderError):
    """Raised when all retry attempts are exhausted."""
    pass
