"""Visibility resolver for conditional fields"""

from typing import Any, List, Mapping, Sequence

from .fields import FieldDescriptor


def is_visible(field: FieldDescriptor, values: Mapping[str, Any]) -> bool:
    """A field is visible unless its show_when predicate says otherwise"""
    if field.show_when is None:
        return True
    return bool(field.show_when(values))


def visible_fields(fields: Sequence[FieldDescriptor], values: Mapping[str, Any]) -> List[FieldDescriptor]:
    """Fields that take part in rendering and validation, in schema order"""
    return [f for f in fields if is_visible(f, values)]


def hidden_field_names(fields: Sequence[FieldDescriptor], values: Mapping[str, Any]) -> List[str]:
    return [f.name for f in fields if not is_visible(f, values)]
