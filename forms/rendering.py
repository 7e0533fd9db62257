"""Glue between a dialog and whatever draws its controls

The engine does not draw widgets. A view layer registers one renderer per
field kind; ``render_contexts`` hands each renderer the value, displayed
error, disabled flag and callbacks for one visible field.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from core.exceptions import SchemaException
from .dialog import SlideDialog
from .fields import FieldDescriptor, FieldKind


@dataclass(frozen=True)
class FieldRenderContext:
    """Everything a renderer needs to draw one field"""
    field: FieldDescriptor
    value: Any
    error: Optional[str]
    disabled: bool
    key: str
    on_change: Callable[[Any], None]
    on_blur: Callable[[], None]

    @property
    def help_text(self) -> Optional[str]:
        return self.error or self.field.helper_text

    @property
    def has_error(self) -> bool:
        return bool(self.error)


FieldRenderer = Callable[[FieldRenderContext], None]


class RendererRegistry:
    """Lookup table from field kind to renderer"""

    def __init__(self, renderers: Optional[Mapping[FieldKind, FieldRenderer]] = None):
        self._renderers: Dict[FieldKind, FieldRenderer] = {}
        for kind, renderer in (renderers or {}).items():
            self.register(kind, renderer)

    def register(self, kind, renderer: Optional[FieldRenderer] = None):
        """Register a renderer; usable as a decorator when renderer is omitted"""
        kind = FieldKind.parse(kind)

        def decorator(func: FieldRenderer) -> FieldRenderer:
            self._renderers[kind] = func
            return func

        if renderer is not None:
            return decorator(renderer)
        return decorator

    def register_many(self, kinds: Iterable[FieldKind], renderer: FieldRenderer) -> None:
        for kind in kinds:
            self.register(kind, renderer)

    def renderer_for(self, kind: FieldKind) -> FieldRenderer:
        try:
            return self._renderers[FieldKind.parse(kind)]
        except KeyError:
            raise SchemaException(f"No renderer registered for field kind '{kind}'")

    def missing_kinds(self) -> Set[FieldKind]:
        return set(FieldKind) - set(self._renderers)

    def ensure_complete(self) -> None:
        """Fail fast when some kind has no renderer"""
        missing = self.missing_kinds()
        if missing:
            names = ", ".join(sorted(k.value for k in missing))
            raise SchemaException(f"Missing renderers for: {names}")

    def render(self, context: FieldRenderContext) -> None:
        self.renderer_for(context.field.kind)(context)

    def __contains__(self, kind) -> bool:
        return FieldKind.parse(kind) in self._renderers


def widget_key(dialog: SlideDialog, name: str, prefix: str = "dialog") -> str:
    """Widget key unique to a dialog session so reopening starts clean"""
    return f"{prefix}-{dialog.session}-{name}"


def render_contexts(dialog: SlideDialog, prefix: str = "dialog") -> List[FieldRenderContext]:
    """Contexts for the fields currently visible in an open dialog"""
    state = dialog.state
    contexts = []
    for descriptor in dialog.visible_fields():
        name = descriptor.name
        contexts.append(FieldRenderContext(
            field=descriptor,
            value=state.values.get(name),
            error=state.displayed_error(name),
            disabled=dialog.is_field_disabled(descriptor),
            key=widget_key(dialog, name, prefix),
            on_change=lambda value, name=name: dialog.change(name, value),
            on_blur=lambda name=name: dialog.blur(name),
        ))
    return contexts


_SPAN_PATTERN = re.compile(r"^span\s+(\d+)$")
_FULL_ROW_PATTERN = re.compile(r"^1\s*/\s*-1$")


def grid_span(field: FieldDescriptor, columns: int) -> int:
    """Number of grid columns a field occupies"""
    hint = (field.grid_column or "").strip()
    if not hint:
        return 1
    if _FULL_ROW_PATTERN.match(hint):
        return columns
    match = _SPAN_PATTERN.match(hint)
    if match:
        return max(1, min(int(match.group(1)), columns))
    return 1


def layout_rows(fields: Sequence[FieldDescriptor], columns: int) -> List[List[FieldDescriptor]]:
    """Pack fields left to right into rows of at most ``columns`` grid cells"""
    rows: List[List[FieldDescriptor]] = []
    current: List[FieldDescriptor] = []
    used = 0
    for descriptor in fields:
        span = grid_span(descriptor, columns)
        if current and used + span > columns:
            rows.append(current)
            current, used = [], 0
        current.append(descriptor)
        used += span
    if current:
        rows.append(current)
    return rows
