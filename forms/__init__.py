"""Declarative slide-in form dialog engine"""

from .fields import (
    FieldKind,
    FieldOption,
    FieldConstraints,
    FieldDescriptor,
    build_schema,
    find_field
)
from .validation import ValidationResult, validate_field, validate_form, is_empty
from .visibility import is_visible, visible_fields, hidden_field_names
from .state import (
    FormState,
    FieldStatus,
    initialize,
    apply_change,
    apply_blur,
    apply_submit_attempt
)
from .dialog import SlideDialog, DialogConfig, DialogStatus, SubmitResult, SubmitStatus
from .rendering import (
    FieldRenderContext,
    RendererRegistry,
    render_contexts,
    grid_span,
    layout_rows
)

__all__ = [
    "FieldKind",
    "FieldOption",
    "FieldConstraints",
    "FieldDescriptor",
    "build_schema",
    "find_field",
    "ValidationResult",
    "validate_field",
    "validate_form",
    "is_empty",
    "is_visible",
    "visible_fields",
    "hidden_field_names",
    "FormState",
    "FieldStatus",
    "initialize",
    "apply_change",
    "apply_blur",
    "apply_submit_attempt",
    "SlideDialog",
    "DialogConfig",
    "DialogStatus",
    "SubmitResult",
    "SubmitStatus",
    "FieldRenderContext",
    "RendererRegistry",
    "render_contexts",
    "grid_span",
    "layout_rows"
]
