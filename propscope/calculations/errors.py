"""
Calculation errors.

Every error is a ValueError so callers that only care about "bad input"
can catch one type. The API layer turns them into HTTP 400 responses.
"""

from typing import List


class CalculationError(ValueError):
    """Base class for errors raised by the calculation engine."""


class InvalidInputError(CalculationError):
    """Raised when a property cannot be projected (e.g. zero size)."""


class MissingColumnsError(CalculationError):
    """Raised when required columns cannot be found in an uploaded dataset."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        columns = ", ".join(f"'{label}'" for label in self.missing)
        super().__init__(
            "Could not find required columns. Please ensure your Excel file "
            f"has columns for: {columns}."
        )


class EmptyInputError(CalculationError):
    """Raised when a dataset contains no records at all."""

    def __init__(self, message: str = "The uploaded file is empty."):
        super().__init__(message)


class NoValidRowsError(CalculationError):
    """Raised when every record was excluded during cleaning."""

    def __init__(
        self, message: str = "No valid data could be summarized from the file."
    ):
        super().__init__(message)
