"""Validation error definitions."""

from dataclasses import dataclass


@dataclass
class ValidationError:
    """Represents a validation error with descriptive message."""

    message: str
    field: str | None = None


class LeachingInputError(ValueError):
    """Leaching inputs are out of physical range or the water is too saline for the crop.

    Not recovered inside the salt engine; the ``errors`` list carries each
    failed check.
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = errors
        super().__init__("; ".join(error.message for error in errors))
