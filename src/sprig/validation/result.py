"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a record against a rule set.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validator.validate(payload)
        if not result:
            return envelope.validation(result.errors)

    ``data`` holds the values of every ruled field that passed and was
    present in the input.

    ``errors`` maps field names to lists of error messages, fields in
    rule-set order and messages in rule order::

        {"name": ["The name field is required"],
         "age": ["The age field must be at least 18"]}
    """

    data: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
