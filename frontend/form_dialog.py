"""Streamlit view for slide dialogs"""

import asyncio
from datetime import date, datetime, time
from typing import Any, Callable, List, Optional

import streamlit as st

from core import get_logger
from forms import FieldDescriptor, FieldKind, FieldRenderContext, RendererRegistry, SlideDialog
from forms.rendering import grid_span, layout_rows, render_contexts


logger = get_logger(__name__)

TEXT_INPUT_KINDS = (FieldKind.TEXT, FieldKind.EMAIL, FieldKind.PASSWORD, FieldKind.TEL, FieldKind.URL)


# Conversions between engine values and widget values

def number_to_widget(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def number_from_widget(value: Optional[float]) -> Any:
    if value is None:
        return ""
    if float(value).is_integer():
        return int(value)
    return value


def date_to_widget(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)) if value else None
    except ValueError:
        return None


def time_to_widget(value: Any) -> Optional[time]:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value)) if value else None
    except ValueError:
        return None


def datetime_to_widget(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value)) if value else None
    except ValueError:
        return None


def datetime_from_widget(day: Optional[date], moment: Optional[time]) -> str:
    if day is None:
        return ""
    return datetime.combine(day, moment or time(0, 0)).strftime("%Y-%m-%dT%H:%M")


def option_values(field: FieldDescriptor, current: Any = None) -> List[Any]:
    """Selectable option values; a disabled option stays listed only while selected"""
    selected = current if isinstance(current, list) else [current]
    return [o.value for o in field.options if not o.disabled or o.value in selected]


def choice_to_widget(field: FieldDescriptor, value: Any) -> Any:
    return value if value in [o.value for o in field.options] else None


# Streamlit plumbing

def _label(field: FieldDescriptor) -> str:
    return f"{field.label} *" if field.required else field.label


def _sync(key: str, widget_value: Any) -> None:
    # The dialog owns the value; widgets only mirror it
    st.session_state[key] = widget_value


def _commit(context: FieldRenderContext, value: Any) -> None:
    context.on_change(value)
    context.on_blur()


def _on_widget_change(context: FieldRenderContext, convert: Callable[[Any], Any]) -> Callable[[], None]:
    def callback() -> None:
        _commit(context, convert(st.session_state[context.key]))
    return callback


def _render_help(context: FieldRenderContext) -> None:
    if context.has_error:
        st.caption(f":red[{context.help_text}]")
    elif context.help_text:
        st.caption(context.help_text)


def render_text_input(context: FieldRenderContext) -> None:
    field = context.field
    _sync(context.key, "" if context.value is None else str(context.value))
    st.text_input(
        _label(field),
        key=context.key,
        type="password" if field.kind == FieldKind.PASSWORD else "default",
        placeholder=field.placeholder,
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: v or ""),
    )
    _render_help(context)


def render_number(context: FieldRenderContext) -> None:
    field = context.field
    _sync(context.key, number_to_widget(context.value))
    st.number_input(
        _label(field),
        key=context.key,
        value=None,
        placeholder=field.placeholder,
        disabled=context.disabled,
        on_change=_on_widget_change(context, number_from_widget),
    )
    _render_help(context)


def render_textarea(context: FieldRenderContext) -> None:
    field = context.field
    _sync(context.key, "" if context.value is None else str(context.value))
    st.text_area(
        _label(field),
        key=context.key,
        height=max(68, field.rows * 28),
        placeholder=field.placeholder,
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: v or ""),
    )
    _render_help(context)


def render_select(context: FieldRenderContext) -> None:
    field = context.field
    _sync(context.key, choice_to_widget(field, context.value))
    st.selectbox(
        _label(field),
        options=option_values(field, context.value),
        index=None,
        format_func=field.option_label,
        key=context.key,
        placeholder=field.placeholder or "Choose an option",
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: "" if v is None else v),
    )
    _render_help(context)


def render_multiselect(context: FieldRenderContext) -> None:
    field = context.field
    allowed = [o.value for o in field.options]
    current = [v for v in (context.value or []) if v in allowed]
    _sync(context.key, current)
    st.multiselect(
        _label(field),
        options=option_values(field, current),
        format_func=field.option_label,
        key=context.key,
        placeholder=field.placeholder or "Choose options",
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: list(v or [])),
    )
    _render_help(context)


def render_radio(context: FieldRenderContext) -> None:
    field = context.field
    _sync(context.key, choice_to_widget(field, context.value))
    st.radio(
        _label(field),
        options=option_values(field, context.value),
        index=None,
        format_func=field.option_label,
        key=context.key,
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: "" if v is None else v),
    )
    _render_help(context)


def render_checkbox(context: FieldRenderContext) -> None:
    _sync(context.key, bool(context.value))
    st.checkbox(
        _label(context.field),
        key=context.key,
        disabled=context.disabled,
        on_change=_on_widget_change(context, bool),
    )
    _render_help(context)


def render_switch(context: FieldRenderContext) -> None:
    _sync(context.key, bool(context.value))
    st.toggle(
        _label(context.field),
        key=context.key,
        disabled=context.disabled,
        on_change=_on_widget_change(context, bool),
    )
    _render_help(context)


def render_date(context: FieldRenderContext) -> None:
    _sync(context.key, date_to_widget(context.value))
    st.date_input(
        _label(context.field),
        key=context.key,
        value=None,
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: v.isoformat() if v else ""),
    )
    _render_help(context)


def render_time(context: FieldRenderContext) -> None:
    _sync(context.key, time_to_widget(context.value))
    st.time_input(
        _label(context.field),
        key=context.key,
        value=None,
        disabled=context.disabled,
        on_change=_on_widget_change(context, lambda v: v.strftime("%H:%M") if v else ""),
    )
    _render_help(context)


def render_datetime(context: FieldRenderContext) -> None:
    field = context.field
    date_key = f"{context.key}-date"
    time_key = f"{context.key}-time"
    current = datetime_to_widget(context.value)
    _sync(date_key, current.date() if current else None)
    _sync(time_key, current.time() if current else None)

    def callback() -> None:
        _commit(context, datetime_from_widget(st.session_state[date_key], st.session_state[time_key]))

    day_col, time_col = st.columns(2)
    with day_col:
        st.date_input(_label(field), key=date_key, value=None, disabled=context.disabled, on_change=callback)
    with time_col:
        st.time_input("Time", key=time_key, value=None, disabled=context.disabled, on_change=callback)
    _render_help(context)


def build_registry() -> RendererRegistry:
    """Streamlit renderer for every field kind"""
    registry = RendererRegistry()
    registry.register_many(TEXT_INPUT_KINDS, render_text_input)
    registry.register(FieldKind.NUMBER, render_number)
    registry.register(FieldKind.TEXTAREA, render_textarea)
    registry.register(FieldKind.SELECT, render_select)
    registry.register(FieldKind.MULTISELECT, render_multiselect)
    registry.register(FieldKind.RADIO, render_radio)
    registry.register(FieldKind.CHECKBOX, render_checkbox)
    registry.register(FieldKind.SWITCH, render_switch)
    registry.register(FieldKind.DATE, render_date)
    registry.register(FieldKind.TIME, render_time)
    registry.register(FieldKind.DATETIME, render_datetime)
    registry.ensure_complete()
    return registry


class StreamlitSlideDialog:
    """Draws a SlideDialog and forwards widget events into it"""

    def __init__(self, dialog: SlideDialog, key: str = "dialog", registry: Optional[RendererRegistry] = None):
        self.dialog = dialog
        self.key = key
        self.registry = registry or build_registry()

    def render(self, container=None) -> None:
        """Render the dialog panel (sidebar by default) when it is open"""
        if not self.dialog.is_open:
            return

        with container or st.sidebar:
            self._render_header()
            self._render_banner()
            self._render_fields()
            self._render_footer()

    def _render_header(self) -> None:
        config = self.dialog.config
        title_col, close_col = st.columns([5, 1])
        with title_col:
            st.subheader(config.title)
            if config.subtitle:
                st.caption(config.subtitle)
        with close_col:
            st.button(
                "✕",
                key=f"{self.key}-close",
                disabled=self.dialog.cancel_disabled,
                on_click=self.dialog.dismiss,
            )
        if config.show_divider:
            st.divider()

    def _render_banner(self) -> None:
        error = self.dialog.submit_error
        if error is not None:
            st.error(error.message)

    def _render_fields(self) -> None:
        columns = self.dialog.config.grid_columns
        contexts = {c.field.name: c for c in render_contexts(self.dialog, prefix=self.key)}
        rows = layout_rows([c.field for c in contexts.values()], columns)

        for row in rows:
            spans = [grid_span(f, columns) for f in row]
            remainder = columns - sum(spans)
            cells = st.columns(spans + [remainder] if remainder > 0 else spans)
            for cell, descriptor in zip(cells, row):
                with cell:
                    self.registry.render(contexts[descriptor.name])

    def _render_footer(self) -> None:
        if self.dialog.config.show_divider:
            st.divider()
        cancel_col, save_col = st.columns(2)
        with cancel_col:
            st.button(
                self.dialog.config.cancel_button_text,
                key=f"{self.key}-cancel",
                disabled=self.dialog.cancel_disabled,
                on_click=self.dialog.cancel,
                use_container_width=True,
            )
        with save_col:
            st.button(
                self.dialog.save_label,
                key=f"{self.key}-save",
                type="primary",
                disabled=self.dialog.save_disabled,
                on_click=self._submit,
                use_container_width=True,
            )

    def _submit(self) -> None:
        result = asyncio.run(self.dialog.submit())
        logger.debug(f"Dialog '{self.dialog.config.title}' submit finished: {result.status.value}")
