"""Shared base helpers for the sizing model dataclasses."""

from __future__ import annotations
from abc import abstractmethod
from typing import Any, Mapping, Sequence, cast
from _collections_abc import Mapping as ABCMapping, Sequence as ABCSequence
from loguru import logger
from ..classes_references import FieldError, ValidationError


class Validatable:
    """
    A mixin class that provides a validation interface for domain models.

    Classes that inherit from `Validatable` must implement the `validate` method.
    This mixin supplies the `assert_valid` helper, which invokes `validate` and
    raises a `ValidationError` if any errors are found.
    """

    def assert_valid(self, prefix: str = "") -> None:
        """
        Raise a `ValidationError` if the model is invalid.

        Args:
            prefix: An optional string to prepend to each offending field name.
        """
        errors: list[FieldError] = self.validate(prefix=prefix)
        if errors:
            logger.debug(
                "Validation failed for {model}: {errors}",
                model=self.__class__.__name__,
                errors="; ".join(str(error) for error in errors),
            )
            raise ValidationError(errors)
        logger.debug("Validation succeeded for {model}.", model=self.__class__.__name__)

    @abstractmethod
    def validate(self, prefix: str = "") -> list[FieldError]:
        """
        Return a list of field errors, or an empty list if the model is valid.

        This method must be implemented by any class that inherits from `Validatable`.

        Args:
            prefix: A string to prepend to each field name for context.
        """
        pass


def normalize_sequence(value: Any) -> list[Any]:
    """Return a list or fall back to an empty list for non-sequence values."""

    if isinstance(value, ABCSequence) and not isinstance(value, (str, bytes)):
        return list(cast(Sequence[Any], value))
    return []


def normalize_mapping(value: Any) -> Mapping[str, Any]:
    """Return a mapping or an empty dict if the value is not mapping-like."""

    if isinstance(value, ABCMapping):
        return cast(Mapping[str, Any], value)
    return {}


def optional_float(value: Any) -> float | None:
    """Return `float(value)` or None when the value is missing."""

    if value is None:
        return None
    return float(value)
