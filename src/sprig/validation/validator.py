"""Declarative rule-set validation.

A rule set maps field names to rule tokens::

    validator = Validator({
        "name": ["required", "string", "max:120"],
        "age": ["integer", "min:18"],
        "status": ["in:draft:published"],
    })
    result = validator.validate(payload)

Tokens are looked up first among the validator's own rules (``add_rule``)
and then in the process-wide registry. A rule function may also be put
in the list directly; it is called with no parameters.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sprig.errors import UnknownRuleError
from sprig.validation.result import ValidationResult
from sprig.validation.rules import MISSING, Rule, RuleSpec, get_rule, is_absent, parse_rule

logger = logging.getLogger("sprig.validation")

type RuleSet = Mapping[str, Sequence[str | Rule]]


class Validator:
    """Evaluate a rule set against input records.

    Unknown rule names are skipped by default, so a typo silently
    disables that rule. Pass ``strict=True`` to raise
    ``UnknownRuleError`` instead.
    """

    __slots__ = ("_custom", "_rules", "_strict")

    def __init__(self, rules: RuleSet, *, strict: bool = False) -> None:
        self._rules: dict[str, list[RuleSpec | Rule]] = {
            field: [parse_rule(r) if isinstance(r, str) else r for r in field_rules]
            for field, field_rules in rules.items()
        }
        self._custom: dict[str, Rule] = {}
        self._strict = strict

    @property
    def fields(self) -> list[str]:
        return list(self._rules)

    @property
    def strict(self) -> bool:
        return self._strict

    def add_rule(self, name: str, func: Rule) -> None:
        """Register or override *name* for this validator only."""
        self._custom[name] = func

    def lookup(self, name: str) -> Rule | None:
        """Resolve a rule name, preferring this validator's own rules."""
        return self._custom.get(name) or get_rule(name)

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Run every rule against *data* and collect the failures."""
        errors: dict[str, list[str]] = {}
        cleaned: dict[str, Any] = {}

        for field, rules in self._rules.items():
            value = data.get(field, MISSING)
            field_errors: list[str] = []

            for rule in rules:
                if isinstance(rule, RuleSpec):
                    func = self.lookup(rule.name)
                    if func is None:
                        if self._strict:
                            msg = f"Unknown validation rule {rule.name!r} on field {field!r}"
                            raise UnknownRuleError(msg)
                        logger.debug("skipping unknown rule %r on field %r", rule.name, field)
                        continue
                    message = func(value, field, list(rule.params), data)
                else:
                    message = rule(value, field, [], data)

                if message is not None:
                    field_errors.append(message)

            if field_errors:
                errors[field] = field_errors
            elif not is_absent(value):
                cleaned[field] = value

        return ValidationResult(data=cleaned, errors=errors)
