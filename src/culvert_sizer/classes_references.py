"""Core error types shared across culvert-sizer."""
from _collections_abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single rejected input field and the reason it was rejected."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class ValidationError(ValueError):
    """Exception raised when sizing input fails validation."""

    def __init__(self, errors: Sequence[FieldError]) -> None:
        self.errors: list[FieldError] = list(errors)
        message: str = "; ".join(str(error) for error in self.errors) if self.errors else "Unknown validation error."
        super().__init__(message)

    def fields(self) -> list[str]:
        """Return the names of the offending fields in report order."""
        return [error.field for error in self.errors]
