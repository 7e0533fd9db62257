"""Validation engine for slide dialog fields

Every check here is a pure function of a field descriptor and a value.
Problems come back as message strings; nothing in this module raises for
bad user input.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence
from urllib.parse import urlsplit

from .fields import FieldDescriptor, FieldKind
from .visibility import is_visible


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(
    r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$"
)
URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Schemes that only make sense with a host part
HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


@dataclass
class ValidationResult:
    """Outcome of validating a whole form"""
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid


def is_empty(value: Any) -> bool:
    """True for None, the empty string and empty sequences"""
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def is_absolute_url(value: Any) -> bool:
    """
    True when value parses as an absolute URL

    Surrounding whitespace is ignored, and host-based schemes tolerate
    missing slashes: "http:example.com" reads as "http://example.com".
    """
    if not isinstance(value, str):
        return False
    text = value.strip()
    try:
        parts = urlsplit(text)
        if parts.scheme.lower() in HOST_SCHEMES and not parts.netloc:
            rest = text[len(parts.scheme) + 1:].lstrip("/")
            parts = urlsplit(f"{parts.scheme}://{rest}")
        # Accessing port validates it
        parts.port
    except ValueError:
        return False
    if not parts.scheme or not URL_SCHEME_PATTERN.match(parts.scheme):
        return False
    if any(ch.isspace() for ch in parts.netloc):
        return False
    if parts.scheme.lower() in HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path)


def _check_email(value: Any) -> Optional[str]:
    if not EMAIL_PATTERN.fullmatch(_as_text(value)):
        return "Invalid email address"
    return None


def _check_url(value: Any) -> Optional[str]:
    if not is_absolute_url(value):
        return "Invalid URL"
    return None


def _check_phone(value: Any) -> Optional[str]:
    if not PHONE_PATTERN.fullmatch(_as_text(value)):
        return "Invalid phone number"
    return None


KIND_CHECKS: Dict[FieldKind, Callable[[Any], Optional[str]]] = {
    FieldKind.EMAIL: _check_email,
    FieldKind.URL: _check_url,
    FieldKind.TEL: _check_phone,
}


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_as_text(item) for item in value)
    return str(value)


def _as_number(value: Any) -> Optional[float]:
    """Read value as a number; None when it is not one"""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _format_bound(bound: Any) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def _check_constraints(field: FieldDescriptor, value: Any) -> Optional[str]:
    constraints = field.constraints
    if constraints is None:
        return None

    if constraints.pattern is not None and not constraints.pattern.search(_as_text(value)):
        return f"{field.label} format is invalid"

    if field.kind == FieldKind.NUMBER:
        number = _as_number(value)
        if number is not None:
            # min is checked before max
            if constraints.min is not None and number < constraints.min:
                return f"{field.label} must be at least {_format_bound(constraints.min)}"
            if constraints.max is not None and number > constraints.max:
                return f"{field.label} must be at most {_format_bound(constraints.max)}"

    if isinstance(value, str):
        if constraints.min_length is not None and len(value) < constraints.min_length:
            return f"{field.label} must be at least {constraints.min_length} characters"
        if constraints.max_length is not None and len(value) > constraints.max_length:
            return f"{field.label} must be at most {constraints.max_length} characters"

    if constraints.custom is not None:
        message = constraints.custom(value)
        if message:
            return message

    return None


def validate_field(field: FieldDescriptor, value: Any) -> Optional[str]:
    """
    Validate a single field value

    Args:
        field: Field descriptor
        value: Current value of the field

    Returns:
        The first error message found, or None when the value is valid
    """
    if is_empty(value):
        if field.required:
            return f"{field.label} is required"
        return None

    kind_check = KIND_CHECKS.get(field.kind)
    if kind_check is not None:
        error = kind_check(value)
        if error:
            return error

    return _check_constraints(field, value)


def validate_form(fields: Sequence[FieldDescriptor], values: Mapping[str, Any]) -> ValidationResult:
    """
    Validate every visible field in schema order

    Fields hidden by their ``show_when`` predicate are skipped and never
    appear in the error map.
    """
    result = ValidationResult()
    for descriptor in fields:
        if not is_visible(descriptor, values):
            continue
        error = validate_field(descriptor, values.get(descriptor.name))
        if error:
            result.errors[descriptor.name] = error
    return result
