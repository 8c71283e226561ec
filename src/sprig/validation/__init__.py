"""Declarative validation — named rules, clean results.

Usage::

    from sprig.validation import validate

    result = validate(
        {
            "name": ["required", "string"],
            "email": ["required", "email"],
            "age": ["integer", "min:18"],
        },
        payload,
    )
    if not result:
        return envelope.validation(result.errors)
"""

from collections.abc import Mapping
from typing import Any

from sprig.validation.result import ValidationResult
from sprig.validation.rules import (
    BUILTIN_RULES,
    MISSING,
    Rule,
    RuleSpec,
    is_empty,
    parse_rule,
    register_rule,
    unregister_rule,
)
from sprig.validation.validator import RuleSet, Validator

__all__ = [
    "BUILTIN_RULES",
    "MISSING",
    "Rule",
    "RuleSet",
    "RuleSpec",
    "ValidationResult",
    "Validator",
    "is_empty",
    "parse_rule",
    "register_rule",
    "unregister_rule",
    "validate",
]


def validate(rules: RuleSet, data: Mapping[str, Any], *, strict: bool = False) -> ValidationResult:
    """Validate *data* against a rule set in one call.

    Args:
        rules: Field name -> list of rule tokens (``"required"``,
            ``"min:3"``, ``"in:a:b"``) or rule functions.
        data: The input record. Absent fields are validated as
            ``MISSING``, which only presence rules reject.
        strict: Raise ``UnknownRuleError`` for unregistered rule names
            instead of skipping them.

    Example::

        validate({"age": ["integer", "min:18"]}, {"age": "17"}).errors
        # {"age": ["The age field must be at least 18"]}
    """
    return Validator(rules, strict=strict).validate(data)
