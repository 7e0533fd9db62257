"""Form state and its transitions

A ``FormState`` is an immutable snapshot of one open dialog session. The
transition functions never mutate their input; each returns a new state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

from core import get_logger
from .fields import FieldDescriptor, find_field
from .validation import ValidationResult, validate_field, validate_form


logger = get_logger(__name__)


class FieldStatus(str, Enum):
    """Lifecycle of a single field within a session"""
    PRISTINE = "pristine"
    DIRTY = "dirty"
    TOUCHED = "touched"


@dataclass(frozen=True)
class FormState:
    """Values, errors and touched flags for one dialog session"""
    values: Dict[str, Any]
    errors: Dict[str, str] = field(default_factory=dict)
    touched: Dict[str, bool] = field(default_factory=dict)
    dirty: FrozenSet[str] = frozenset()

    def is_touched(self, name: str) -> bool:
        return bool(self.touched.get(name))

    def field_status(self, name: str) -> FieldStatus:
        if self.is_touched(name):
            return FieldStatus.TOUCHED
        if name in self.dirty:
            return FieldStatus.DIRTY
        return FieldStatus.PRISTINE

    def displayed_error(self, name: str) -> Optional[str]:
        """Error to show under a control; only touched fields show one"""
        if not self.is_touched(name):
            return None
        return self.errors.get(name) or None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def _with_error(errors: Mapping[str, str], name: str, error: Optional[str]) -> Dict[str, str]:
    updated = dict(errors)
    if error:
        updated[name] = error
    else:
        updated.pop(name, None)
    return updated


def initialize(
    fields: Sequence[FieldDescriptor],
    initial_values: Optional[Mapping[str, Any]] = None
) -> FormState:
    """Seed a fresh state: caller values, then defaults, then zero values"""
    values = {f.name: f.initial_value(initial_values) for f in fields}
    return FormState(values=values)


def apply_change(
    state: FormState,
    fields: Sequence[FieldDescriptor],
    name: str,
    value: Any,
    validate_on_change: bool = False
) -> FormState:
    """
    Record a new value for a field

    The field's ``on_change`` hook runs after the value is written and may
    fill in other schema fields through the value map it receives. When
    ``validate_on_change`` is set and the field is already touched, its
    error is recomputed immediately.
    """
    descriptor = find_field(fields, name)
    values = dict(state.values)
    values[name] = value

    if descriptor.on_change is not None:
        descriptor.on_change(value, values)
        known = {f.name for f in fields}
        stray = [key for key in values if key not in known]
        for key in stray:
            logger.warning(f"Change hook for {name!r} wrote unknown field {key!r}; ignoring it")
            del values[key]

    errors = state.errors
    if validate_on_change and state.is_touched(name):
        errors = _with_error(errors, name, validate_field(descriptor, values[name]))

    return replace(state, values=values, errors=dict(errors), dirty=state.dirty | {name})


def apply_blur(state: FormState, fields: Sequence[FieldDescriptor], name: str) -> FormState:
    """Mark a field touched and store its current error"""
    descriptor = find_field(fields, name)
    touched = dict(state.touched)
    touched[name] = True
    errors = _with_error(state.errors, name, validate_field(descriptor, state.values.get(name)))
    return replace(state, touched=touched, errors=errors)


def apply_submit_attempt(
    state: FormState,
    fields: Sequence[FieldDescriptor]
) -> Tuple[FormState, ValidationResult]:
    """
    Touch every schema field and validate the visible ones

    Hidden fields are marked touched too, but ``validate_form`` skips them,
    so they never hold an error after a submit attempt.
    """
    touched = {f.name: True for f in fields}
    result = validate_form(fields, state.values)
    return replace(state, touched=touched, errors=dict(result.errors)), result
