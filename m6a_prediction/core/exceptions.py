"""Exceptions raised while validating and encoding prediction inputs.

Every failure is raised synchronously before the classifier is called.
Errors raised by the classifier itself are never wrapped.
"""

from typing import Iterable, List, Optional


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


class MissingColumnsError(ValidationError):
    """Raised when required feature columns are absent from the input."""

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            f"Missing required feature columns: {self.missing}"
        )


class InvalidModelError(ValidationError):
    """Raised when the classifier cannot produce class probabilities."""
    pass


class InvalidThresholdError(ValidationError):
    """Raised when the threshold is non-numeric or outside [0, 1]."""
    pass


class EmptyInputError(ValidationError):
    """Raised when the input batch has no rows."""
    pass


class InvalidSequenceLengthError(ValidationError):
    """Raised when a DNA sequence does not have the expected length."""
    pass


class InvalidSequenceAlphabetError(ValidationError):
    """Raised when a DNA sequence contains symbols outside A, T, C, G."""
    pass


class UnrecognizedCategoryError(ValidationError):
    """Raised when a categorical value is not one of the registered levels."""

    def __init__(self, column: str, values: Iterable, levels: Optional[Iterable[str]] = None):
        self.column = column
        self.values = list(values)
        self.levels = list(levels) if levels is not None else None
        message = f"Unknown categories for '{column}': {self.values}"
        if self.levels is not None:
            message += f"\nKnown categories: {self.levels}"
        super().__init__(message)


class FeatureMismatchError(ValidationError):
    """Raised when the encoded features drift from what the classifier was fit on."""
    pass
