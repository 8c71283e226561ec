"""Built-in validation rules for sprig rule sets.

Each rule is a plain function with the signature::

    def rule(value, field, params, data) -> str | None:
        '''Return an error message, or None if valid.'''

``value`` is ``data[field]`` or ``MISSING`` when the key is absent,
``params`` are the colon-separated segments after the rule name
(``"min:3"`` -> ``["3"]``), and ``data`` is the full input record.

Custom rules follow the same protocol and are registered by name::

    @register_rule("slug")
    def slug(value, field, params, data):
        if is_empty(value) or SLUG_RE.match(str(value)):
            return None
        return f"The {field} field must be a slug"
"""

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

# Type alias for a rule function
type Rule = Callable[[Any, str, list[str], Mapping[str, Any]], str | None]


class _Missing:
    """Sentinel for a field absent from the input record."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """A parsed rule token: ``"in:draft:published"`` -> ``RuleSpec("in", ("draft", "published"))``."""

    name: str
    params: tuple[str, ...] = ()


def parse_rule(token: str) -> RuleSpec:
    """Split a rule token on ``:`` into its name and parameters."""
    name, *params = token.split(":")
    return RuleSpec(name=name, params=tuple(params))


# ---------------------------------------------------------------------------
# Value predicates
# ---------------------------------------------------------------------------

_CONTAINERS = (list, tuple, dict, set, frozenset)

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

# Checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9\-]+(\.[a-zA-Z0-9\-]+)*\.[a-zA-Z]{2,}$")

_BOOLEAN_STRINGS = frozenset({"0", "1", "true", "false"})


def is_absent(value: Any) -> bool:
    """True for ``MISSING`` and ``None``."""
    return value is MISSING or value is None


def is_empty(value: Any) -> bool:
    """True for absent values, ``""``, and empty containers."""
    if is_absent(value) or value == "":
        return True
    return isinstance(value, _CONTAINERS) and not value


def is_number(value: Any) -> bool:
    """True for ints and finite floats (never bools) and numeric strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def _as_number(value: Any) -> float:
    return float(value)


def _bound(params: list[str], default: float) -> tuple[float, str]:
    """Parse the numeric bound of ``min``/``max`` and keep its text for messages."""
    if not params:
        return default, str(default)
    raw = params[0]
    try:
        return float(raw), raw
    except ValueError:
        return default, raw


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Field must be present and non-empty."""
    if is_empty(value):
        return f"The {field} field is required"
    return None


def excluded(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Field must be absent or an empty string."""
    if not is_absent(value) and value != "":
        return f"The {field} field must not be present"
    return None


def required_in(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``required-in:other:value``: required only when ``data[other]`` equals *value*.

    The comparison is loose: the dependent value is compared as text
    (booleans as ``"true"``/``"false"``). A missing dependent field passes.
    """
    if len(params) < 1:
        return None
    other = params[0]
    expected = params[1] if len(params) > 1 else ""
    actual = data.get(other)
    if actual is None:
        return None
    if _loose_text(actual) == expected:
        return required(value, field, [], data)
    return None


def _loose_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------


def string(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Present values must be text."""
    if not is_absent(value) and not isinstance(value, str):
        return f"The {field} field must be a string"
    return None


def integer(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Non-empty values must be ints or integer strings (bools are rejected)."""
    if is_absent(value) or value == "":
        return None
    if isinstance(value, bool):
        return f"The {field} field must be an integer"
    if isinstance(value, int):
        return None
    if isinstance(value, str) and _INT_RE.match(value):
        return None
    return f"The {field} field must be an integer"


def float_(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Non-empty values must be numeric."""
    if is_absent(value) or value == "":
        return None
    if not is_number(value):
        return f"The {field} field must be a decimal number"
    return None


def boolean(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Present values must be ``True``/``False``, ``0``/``1``, ``"0"``/``"1"``, or ``"true"``/``"false"``."""
    if is_absent(value) or isinstance(value, bool):
        return None
    if type(value) is int and value in (0, 1):
        return None
    if isinstance(value, str) and value in _BOOLEAN_STRINGS:
        return None
    return f"The {field} field must be a boolean"


def dict_(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Present values must be mappings keyed by something other than ``0..n-1``."""
    if is_absent(value):
        return None
    if not isinstance(value, Mapping):
        return f"The {field} field must be an associative array (dictionary)"
    if value and list(value.keys()) == list(range(len(value))):
        return f"The {field} field must be an associative array (dictionary)"
    return None


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def email(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """Non-empty values must look like an email address (basic format check)."""
    if is_empty(value):
        return None
    if not isinstance(value, str) or not _EMAIL_RE.match(value):
        return f"The {field} field must be a valid email format"
    return None


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def in_(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``in:a:b:c``: non-empty values must equal one of the listed strings exactly."""
    if not is_empty(value) and not (isinstance(value, str) and value in params):
        return f"The {field} field must be one of: " + ", ".join(params)
    return None


def excluded_in(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``excluded_in:a:b``: non-empty values must not equal any listed string."""
    if not is_empty(value) and isinstance(value, str) and value in params:
        return f"The {field} field must not be one of: " + ", ".join(params)
    return None


def unique_in(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``unique-in:other``: value must not appear in the list at ``data[other]``.

    Membership is strict (same type and equal). A missing or non-list
    dependent field passes.
    """
    if not params:
        return None
    other = params[0]
    candidates = data.get(other)
    if not isinstance(candidates, (list, tuple)):
        return None
    if is_empty(value):
        return None
    if any(type(item) is type(value) and item == value for item in candidates):
        return f"The {field} field must be unique and not exist in {other}"
    return None


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def min_(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``min:N``: numbers by value, text by length, containers by size."""
    bound, text = _bound(params, 0.0)
    if is_number(value):
        if _as_number(value) < bound:
            return f"The {field} field must be at least {text}"
    elif isinstance(value, str):
        if len(value) < bound:
            return f"The {field} field must be at least {text} characters"
    elif isinstance(value, _CONTAINERS) and len(value) < bound:
        return f"The {field} field must have at least {text} items"
    return None


def max_(value: Any, field: str, params: list[str], data: Mapping[str, Any]) -> str | None:
    """``max:N``: numbers by value, text by length, containers by size."""
    bound, text = _bound(params, math.inf)
    if is_number(value):
        if _as_number(value) > bound:
            return f"The {field} field must not exceed {text}"
    elif isinstance(value, str):
        if len(value) > bound:
            return f"The {field} field must not exceed {text} characters"
    elif isinstance(value, _CONTAINERS) and len(value) > bound:
        return f"The {field} field must not have more than {text} items"
    return None


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

BUILTIN_RULES: dict[str, Rule] = {
    "required": required,
    "excluded": excluded,
    "email": email,
    "string": string,
    "integer": integer,
    "float": float_,
    "boolean": boolean,
    "in": in_,
    "excluded_in": excluded_in,
    "unique-in": unique_in,
    "required-in": required_in,
    "dict": dict_,
    "min": min_,
    "max": max_,
}

# Process-wide registry; validators fall back to it for names they do not override
_registry: dict[str, Rule] = dict(BUILTIN_RULES)


def get_rule(name: str) -> Rule | None:
    """Look up a rule in the process-wide registry."""
    return _registry.get(name)


def register_rule(name: str) -> Callable[[Rule], Rule]:
    """Register *func* under *name* for every validator (decorator)."""

    def decorator(func: Rule) -> Rule:
        _registry[name] = func
        return func

    return decorator


def unregister_rule(name: str) -> None:
    """Remove a custom rule; built-in rules are restored to their defaults."""
    if name in BUILTIN_RULES:
        _registry[name] = BUILTIN_RULES[name]
    else:
        _registry.pop(name, None)
