"""Keystroke-level state machine that edits one masked buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from .engine import MaskingEngine
from .error_timer import ErrorClearTimer
from .messages import MaskMessages
from .notation import Notation

LOGGER = logging.getLogger(__name__)


class EditError(Enum):
    """Recoverable error classifications; values name their message slot."""

    INVALID_NOTATION = "invalid_notation"
    UNAUTHORIZED_CHAR = "unauthorized_char"
    MAX_SIZE_REACHED = "max_size_reached"
    CANNOT_DELETE = "cannot_delete"


class BufferState(Enum):
    """Coarse phases of the edited buffer."""

    EMPTY = auto()
    PARTIAL = auto()
    COMPLETE = auto()


class EditIntent(Enum):
    """Editing stimuli delivered by the host widget."""

    FOCUS = auto()
    INSERT = auto()
    DELETE = auto()
    BLUR = auto()
    SELECT = auto()


class HostBinding(Protocol):
    """Capabilities the controller needs from the widget it is attached to.

    Bindings may also expose ``publish_error(error, message)``; the controller
    calls it whenever the current error is (re)published.
    """

    def write_value(self, value: str) -> None:
        ...

    def on_change(self, value: str) -> None:
        ...

    def on_touched(self) -> None:
        ...

    def set_disabled(self, disabled: bool) -> None:
        ...


@dataclass(frozen=True)
class RejectedCharacter:
    """Character refused during a bulk insert."""

    index: int
    character: str
    error: EditError


@dataclass(frozen=True)
class PasteResult:
    """Outcome of :meth:`EditController.insert_text`."""

    value: str
    rejected: Tuple[RejectedCharacter, ...]
    error: Optional[EditError]
    applied: bool = True

    @property
    def accepted(self) -> bool:
        return self.applied and not self.rejected


class EditController:
    """Apply editing intents to a buffer through a :class:`MaskingEngine`.

    Every rejected intent leaves the buffer exactly as it was, so the buffer
    never grows beyond the notation length nor loses its prefix.
    """

    def __init__(
        self,
        engine: MaskingEngine,
        *,
        binding: HostBinding | None = None,
        messages: MaskMessages | None = None,
        timer: ErrorClearTimer | None = None,
        value: str = "",
    ) -> None:
        self.engine = engine
        self.binding = binding
        self.messages = messages or MaskMessages()
        self.timer = timer or ErrorClearTimer()
        self.disabled = False
        self._value = value or ""
        self._error: EditError | None = None
        self.messages.add_listener(self._on_message_update)
        self.handlers: Dict[EditIntent, Callable[[Optional[str]], Any]] = {
            EditIntent.FOCUS: lambda _text: self.focus(),
            EditIntent.INSERT: self._handle_insert,
            EditIntent.DELETE: lambda _text: self.delete_last(),
            EditIntent.BLUR: lambda _text: self.blur(),
            EditIntent.SELECT: lambda _text: self.collapse_selection(),
        }

    # Public state ---------------------------------------------------------

    @property
    def notation(self) -> Notation:
        return self.engine.notation

    @property
    def value(self) -> str:
        return self._value

    @property
    def error(self) -> EditError | None:
        return self._error

    @property
    def error_message(self) -> str | None:
        if self._error is None:
            return None
        return self.messages.get(self._error.value)

    @property
    def is_valid(self) -> bool:
        return self.engine.validate(self._value)

    @property
    def buffer_state(self) -> BufferState:
        if not self._value:
            return BufferState.EMPTY
        if self.is_valid:
            return BufferState.COMPLETE
        return BufferState.PARTIAL

    # Host binding surface -------------------------------------------------

    def write_value(self, value: str | None) -> None:
        """Accept a value pushed by the host model without echoing a change."""

        self.timer.cancel()
        self._value = value or ""
        if self.binding is not None:
            self.binding.write_value(self._value)

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = bool(disabled)
        if self.binding is not None:
            self.binding.set_disabled(self.disabled)

    def tick(self) -> bool:
        """Advance the auto-clear timer; return whether it fired."""

        return self.timer.tick()

    def dispatch(self, intent: EditIntent, text: str | None = None) -> Any:
        handler = self.handlers.get(intent)
        if handler is None:
            raise ValueError(f"unsupported edit intent: {intent!r}")
        return handler(text)

    # Editing intents ------------------------------------------------------

    def focus(self) -> bool:
        """Autocomplete the prefix into an empty buffer."""

        if self.disabled or self._value:
            return False
        self._commit(self.engine.prefix)
        return True

    def insert(self, text: str) -> bool:
        """Route ``text`` to a single keystroke or a bulk insert."""

        if not text:
            return False
        if len(text) == 1:
            return self.insert_character(text)
        return self.insert_text(text).accepted

    def insert_character(self, character: str) -> bool:
        if len(character) != 1:
            raise ValueError(
                f"insert_character expects exactly one character, received {character!r}"
            )
        if self.disabled:
            return False
        self.timer.cancel()
        error = self._apply_character(character)
        self._settle()
        return error is None

    def insert_text(self, text: str) -> PasteResult:
        """Insert ``text`` one character at a time, then validate once."""

        if self.disabled or not text:
            return PasteResult(self._value, (), self._error, applied=False)
        self.timer.cancel()
        rejected = []
        for index, character in enumerate(text):
            error = self._apply_character(character)
            if error is not None:
                rejected.append(RejectedCharacter(index, character, error))
        self._validate_buffer()
        self._settle()
        if rejected:
            LOGGER.debug("bulk insert into %s rejected %d character(s)", self.notation.name, len(rejected))
        return PasteResult(self._value, tuple(rejected), self._error)

    def delete_last(self) -> bool:
        if self.disabled:
            return False
        self.timer.cancel()
        current = self._value or self.engine.prefix
        prefix = self.engine.prefix
        if prefix and len(current) <= len(prefix):
            self._set_error(EditError.CANNOT_DELETE)
            self._settle()
            return False
        self._clear_error()
        self._commit(current[:-1])
        self._validate_buffer()
        self._settle()
        return True

    def blur(self) -> bool:
        """Mark the field touched and flag an incomplete or malformed value."""

        if self.binding is not None:
            self.binding.on_touched()
        valid = self._validate_buffer()
        self._publish_error()
        return valid

    def collapse_selection(self, start: int | None = None, end: int | None = None) -> int:
        """Return the only caret position allowed: the end of the buffer."""

        return len(self._value)

    # Internal helpers -----------------------------------------------------

    def _handle_insert(self, text: Optional[str]) -> bool:
        if text is None:
            raise ValueError("insert intent requires text")
        return self.insert(text)

    def _apply_character(self, character: str) -> EditError | None:
        # An empty buffer is edited as if the prefix had been autocompleted.
        previous = self._value or self.engine.prefix
        filtered = self.engine.filter(character)
        if previous + filtered == previous:
            LOGGER.debug("rejected %r for %s: unauthorized", character, self.notation.name)
            self._set_error(EditError.UNAUTHORIZED_CHAR)
            return EditError.UNAUTHORIZED_CHAR
        # Uppercasing may expand one key into several characters ("ß" -> "SS").
        final = previous
        for char in filtered:
            candidate = final + self.engine.predict_next_character(final) + char
            final = candidate + self.engine.predict_next_character(candidate)
        if len(final) > self.engine.total_length:
            LOGGER.debug("rejected %r for %s: maximum size reached", character, self.notation.name)
            self._set_error(EditError.MAX_SIZE_REACHED)
            return EditError.MAX_SIZE_REACHED
        self._clear_error()
        self._commit(final)
        return None

    def _validate_buffer(self) -> bool:
        if self.engine.validate(self._value):
            self._clear_error()
            return True
        self._set_error(EditError.INVALID_NOTATION)
        return False

    def _settle(self) -> None:
        # A valid buffer only shows a transient error; schedule its removal.
        self._publish_error()
        if self._error is not None and self.is_valid:
            self.timer.start(self._expire_error)

    def _expire_error(self) -> None:
        self._error = None
        self._publish_error()

    def _commit(self, value: str) -> None:
        self._value = value
        if self.binding is not None:
            self.binding.write_value(value)
            self.binding.on_change(value)

    def _set_error(self, error: EditError) -> None:
        self.timer.cancel()
        self._error = error

    def _clear_error(self) -> None:
        self.timer.cancel()
        self._error = None

    def _publish_error(self) -> None:
        publisher = getattr(self.binding, "publish_error", None)
        if callable(publisher):
            publisher(self._error, self.error_message)

    def _on_message_update(self, key: str, text: str) -> None:
        if self._error is not None and self._error.value == key:
            self._publish_error()


__all__ = [
    "BufferState",
    "EditController",
    "EditError",
    "EditIntent",
    "HostBinding",
    "PasteResult",
    "RejectedCharacter",
]
