"""Slide-in form dialog with a validate-then-save submission pipeline"""

import asyncio
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from config.settings import settings
from core import DialogLoggerAdapter, get_logger
from core.exceptions import DialogStateException, SaveException
from .fields import FieldDescriptor, build_schema
from .state import FormState, apply_blur, apply_change, apply_submit_attempt, initialize
from .visibility import hidden_field_names, is_visible, visible_fields


SaveHandler = Callable[[Dict[str, Any]], Any]
CloseHandler = Callable[[], None]


class DialogStatus(str, Enum):
    """Dialog lifecycle states"""
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class SubmitStatus(str, Enum):
    """Outcome of a submit call"""
    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass
class SubmitResult:
    """What happened when the user pressed Save"""
    status: SubmitStatus
    errors: Dict[str, str] = field(default_factory=dict)
    error: Optional[SaveException] = None

    @property
    def ok(self) -> bool:
        return self.status == SubmitStatus.SAVED


@dataclass
class DialogConfig:
    """Display configuration for a slide dialog"""
    title: str = ""
    subtitle: Optional[str] = None
    save_button_text: str = "Save"
    cancel_button_text: str = "Cancel"
    saving_button_text: str = "Saving..."
    grid_columns: int = 2
    width: int = 480
    show_divider: bool = True
    validate_on_change: bool = False

    @classmethod
    def from_settings(cls, **overrides) -> "DialogConfig":
        """Build a config from application settings, with per-dialog overrides"""
        options = settings.get_dialog_settings()
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**options)


class SlideDialog:
    """
    Controller for one slide-in form dialog

    Owns the form state of the current session. Opening the dialog always
    starts a new session seeded from ``initial_values``; closing it drops
    the state. The view layer forwards change, blur and submit events here
    and reads values, displayed errors and disabled flags back.
    """

    def __init__(
        self,
        fields: Iterable[Union[FieldDescriptor, Mapping[str, Any]]],
        on_save: SaveHandler,
        on_close: Optional[CloseHandler] = None,
        config: Optional[DialogConfig] = None,
        loading: bool = False,
        save_timeout: Optional[float] = None,
        error_message: Optional[str] = None
    ):
        self.fields = build_schema(fields)
        self.config = config or DialogConfig.from_settings()
        self.loading = loading
        self.save_timeout = save_timeout if save_timeout is not None else settings.save_timeout_seconds
        self.error_message = error_message or settings.submit_error_message

        self._on_save = on_save
        self._on_close = on_close
        self._state: Optional[FormState] = None
        self._submitting = False
        self._submit_error: Optional[SaveException] = None
        self._session = 0

        self.logger = DialogLoggerAdapter(
            get_logger(__name__), {"dialog": self.config.title, "session": self._session}
        )

    # Read-only views

    @property
    def status(self) -> DialogStatus:
        if self._state is None:
            return DialogStatus.CLOSED
        if self._submitting:
            return DialogStatus.SUBMITTING
        return DialogStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self._state is not None

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def session(self) -> int:
        """Counter bumped on every open; view layers key widgets on it"""
        return self._session

    @property
    def state(self) -> FormState:
        return self._require_open()

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._require_open().values)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._require_open().errors)

    @property
    def touched(self) -> Dict[str, bool]:
        return dict(self._require_open().touched)

    @property
    def submit_error(self) -> Optional[SaveException]:
        """Last save failure, shown to the user as a banner"""
        return self._submit_error

    @property
    def save_disabled(self) -> bool:
        return self.loading or self._submitting

    @property
    def cancel_disabled(self) -> bool:
        return self._submitting

    @property
    def save_label(self) -> str:
        if self._submitting:
            return self.config.saving_button_text
        return self.config.save_button_text

    def visible_fields(self) -> List[FieldDescriptor]:
        return visible_fields(self.fields, self._require_open().values)

    def is_field_visible(self, descriptor: FieldDescriptor) -> bool:
        return is_visible(descriptor, self._require_open().values)

    def is_field_disabled(self, descriptor: FieldDescriptor) -> bool:
        return descriptor.disabled or self.loading or self._submitting

    def displayed_error(self, name: str) -> Optional[str]:
        return self._require_open().displayed_error(name)

    # Lifecycle

    def open(self, initial_values: Optional[Mapping[str, Any]] = None) -> None:
        """Start a new session, discarding anything left from a previous one"""
        if self._submitting:
            raise DialogStateException("Cannot reopen a dialog while it is saving")
        self._session += 1
        self.logger.extra["session"] = self._session
        self._state = initialize(self.fields, initial_values)
        self._submit_error = None
        self.logger.info(f"Opened dialog '{self.config.title}'")

    def cancel(self) -> bool:
        """Cancel button"""
        return self._request_close("cancel")

    def dismiss(self) -> bool:
        """Header close control or click outside the panel"""
        return self._request_close("dismiss")

    def _request_close(self, reason: str) -> bool:
        if self._submitting:
            self.logger.debug(f"Ignoring {reason} while saving")
            return False
        if self._state is None:
            return False
        self.logger.info(f"Closing dialog ({reason})")
        self._close()
        return True

    def _close(self) -> None:
        self._state = None
        self._submit_error = None
        if self._on_close is not None:
            self._on_close()

    # Field events

    def change(self, name: str, value: Any) -> None:
        state = self._require_open()
        if self._submitting:
            self.logger.debug(f"Ignoring change to {name!r} while saving")
            return
        self._state = apply_change(
            state, self.fields, name, value,
            validate_on_change=self.config.validate_on_change
        )

    def blur(self, name: str) -> None:
        state = self._require_open()
        if self._submitting:
            self.logger.debug(f"Ignoring blur of {name!r} while saving")
            return
        self._state = apply_blur(state, self.fields, name)

    # Submission

    async def submit(self) -> SubmitResult:
        """
        Validate the form and, when clean, hand the visible values to on_save

        A failed save keeps the dialog open with the user's input intact and
        exposes the failure through ``submit_error``.
        """
        state = self._require_open()
        if self._submitting or self.loading:
            self.logger.debug("Ignoring submit while busy")
            return SubmitResult(status=SubmitStatus.IGNORED)

        self._submit_error = None
        state, result = apply_submit_attempt(state, self.fields)
        self._state = state
        if not result.valid:
            self.logger.info(f"Submit blocked by {len(result.errors)} invalid field(s)")
            return SubmitResult(status=SubmitStatus.INVALID, errors=dict(result.errors))

        hidden = hidden_field_names(self.fields, state.values)
        if hidden:
            self.logger.debug(f"Leaving hidden field(s) out of the save: {', '.join(hidden)}")
        payload = {name: value for name, value in state.values.items() if name not in hidden}

        self._submitting = True
        self.logger.info("Saving dialog values")
        try:
            await self._run_save(payload)
        except Exception as e:
            self.logger.error(f"Error saving form: {e}", exc_info=True)
            self._submit_error = SaveException(self.error_message, cause=e)
            return SubmitResult(status=SubmitStatus.FAILED, error=self._submit_error)
        finally:
            self._submitting = False

        self.logger.info("Dialog saved")
        self._close()
        return SubmitResult(status=SubmitStatus.SAVED)

    async def _run_save(self, payload: Dict[str, Any]) -> None:
        outcome = self._on_save(payload)
        if not inspect.isawaitable(outcome):
            return
        if self.save_timeout:
            await asyncio.wait_for(outcome, timeout=self.save_timeout)
        else:
            await outcome

    def _require_open(self) -> FormState:
        if self._state is None:
            raise DialogStateException("Dialog is not open")
        return self._state

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} title='{self.config.title}' status={self.status.value}>"
