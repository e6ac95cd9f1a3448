"""Custom exceptions for data module."""

from __future__ import annotations

from ..errors import ValuationError


class DataError(ValuationError):
    """Base exception for data-related errors."""

    stage = "load"


class DataFormatError(DataError):
    """
    Raised when a dataset row cannot be turned into a labeled sample.

    This can happen when:
    - A required numeric field is not a valid decimal
    - A row is too short to hold a mapped column
    - The source holds no data rows at all

    The whole load fails; rows are never dropped silently.
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        field: str | None = None,
        stage: str | None = None,
    ):
        """
        Initialize DataFormatError.

        Args:
            message: Error message
            row: Zero-based index of the offending data row (header excluded)
            field: Name of the offending field
            stage: Pipeline stage, when not loading
        """
        super().__init__(message, stage)
        self.row = row
        self.field = field


class ColumnConfigError(DataError):
    """
    Raised when the column mapping configuration is invalid.

    This can happen when:
    - Config file not found
    - Invalid YAML syntax
    - A feature has no column position
    - A column position is negative or not an integer
    """

    pass
