"""Field descriptors: the schema a caller hands to a slide dialog"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Pattern, Sequence, Tuple, Union

from core.exceptions import FieldNotFoundException, SchemaException


Values = Dict[str, Any]
CustomValidator = Callable[[Any], Optional[str]]
VisibilityPredicate = Callable[[Mapping[str, Any]], bool]
ChangeHook = Callable[[Any, Values], None]


class FieldKind(str, Enum):
    """Closed set of field kinds a dialog can render"""
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEL = "tel"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SWITCH = "switch"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"

    @classmethod
    def parse(cls, value: Union[str, "FieldKind"]) -> "FieldKind":
        """Parse a kind name, accepting the HTML ``datetime-local`` alias"""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "datetime-local":
            return cls.DATETIME
        try:
            return cls(name)
        except ValueError:
            raise SchemaException(f"Unsupported field kind: {value!r}")

    @property
    def uses_options(self) -> bool:
        return self in OPTION_KINDS

    @property
    def is_boolean(self) -> bool:
        return self in (FieldKind.CHECKBOX, FieldKind.SWITCH)


OPTION_KINDS = frozenset({FieldKind.SELECT, FieldKind.MULTISELECT, FieldKind.RADIO})


@dataclass(frozen=True)
class FieldOption:
    """One choice of a select, multiselect or radio field"""
    value: Any
    label: str
    disabled: bool = False

    @classmethod
    def coerce(cls, option: Union["FieldOption", Mapping[str, Any], Any]) -> "FieldOption":
        if isinstance(option, FieldOption):
            return option
        if isinstance(option, Mapping):
            if "value" not in option:
                raise SchemaException(f"Option is missing a value: {option!r}")
            value = option["value"]
            return cls(
                value=value,
                label=str(option.get("label", value)),
                disabled=bool(option.get("disabled", False))
            )
        # Bare values label themselves
        return cls(value=option, label=str(option))


@dataclass(frozen=True)
class FieldConstraints:
    """Caller supplied checks that run after the built-in ones"""
    pattern: Optional[Union[str, Pattern]] = None
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    custom: Optional[CustomValidator] = None

    def __post_init__(self):
        if isinstance(self.pattern, str):
            try:
                object.__setattr__(self, "pattern", re.compile(self.pattern))
            except re.error as e:
                raise SchemaException(f"Invalid pattern {self.pattern!r}: {e}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldConstraints":
        return cls(
            pattern=data.get("pattern"),
            min=data.get("min"),
            max=data.get("max"),
            min_length=data.get("min_length", data.get("minLength")),
            max_length=data.get("max_length", data.get("maxLength")),
            custom=data.get("custom"),
        )


# camelCase keys accepted by FieldDescriptor.from_dict
_FIELD_ALIASES = {
    "type": "kind",
    "defaultValue": "default_value",
    "helperText": "helper_text",
    "gridColumn": "grid_column",
    "dependsOn": "depends_on",
    "showWhen": "show_when",
    "onChange": "on_change",
    "validation": "constraints",
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Immutable description of one form field"""
    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    options: Tuple[FieldOption, ...] = ()
    constraints: Optional[FieldConstraints] = None
    default_value: Any = None
    depends_on: Optional[str] = None
    show_when: Optional[VisibilityPredicate] = field(default=None, compare=False)
    on_change: Optional[ChangeHook] = field(default=None, compare=False)

    # Presentation
    placeholder: Optional[str] = None
    helper_text: Optional[str] = None
    disabled: bool = False
    grid_column: Optional[str] = None
    rows: int = 4

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise SchemaException(f"Field name must be a non-empty string, got {self.name!r}")
        object.__setattr__(self, "kind", FieldKind.parse(self.kind))
        object.__setattr__(
            self, "options", tuple(FieldOption.coerce(o) for o in (self.options or ()))
        )
        if isinstance(self.constraints, Mapping):
            object.__setattr__(self, "constraints", FieldConstraints.from_dict(self.constraints))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        """Build a descriptor from a plain mapping (snake_case or camelCase keys)"""
        kwargs = {}
        for key, value in data.items():
            kwargs[_FIELD_ALIASES.get(key, key)] = value
        kwargs.setdefault("label", kwargs.get("name", ""))
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise SchemaException(f"Invalid field definition {dict(data)!r}: {e}")

    def zero_value(self) -> Any:
        """Kind-appropriate empty value"""
        if self.kind == FieldKind.MULTISELECT:
            return []
        if self.kind.is_boolean:
            return False
        return ""

    def initial_value(self, initial_values: Optional[Mapping[str, Any]] = None) -> Any:
        """Seed value: caller value, then the declared default, then the zero value"""
        if initial_values and self.name in initial_values:
            return _copy_value(initial_values[self.name])
        if self.default_value is not None:
            return _copy_value(self.default_value)
        return self.zero_value()

    def option_label(self, value: Any) -> str:
        for option in self.options:
            if option.value == value:
                return option.label
        return str(value)


def _copy_value(value: Any) -> Any:
    # Sequences are copied so sessions never share a list
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return value


def build_schema(fields: Iterable[Union[FieldDescriptor, Mapping[str, Any]]]) -> Tuple[FieldDescriptor, ...]:
    """Normalize a field sequence and check that names are unique"""
    schema = []
    seen = set()
    for item in fields:
        descriptor = item if isinstance(item, FieldDescriptor) else FieldDescriptor.from_dict(item)
        if descriptor.name in seen:
            raise SchemaException(f"Duplicate field name: {descriptor.name!r}")
        seen.add(descriptor.name)
        schema.append(descriptor)
    return tuple(schema)


def find_field(fields: Sequence[FieldDescriptor], name: str) -> FieldDescriptor:
    """Look up a field by name"""
    for descriptor in fields:
        if descriptor.name == name:
            return descriptor
    raise FieldNotFoundException(name)
