"""User-facing messages for the four edit error classifications."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

LOGGER = logging.getLogger(__name__)

MESSAGE_KEYS: tuple[str, ...] = (
    "max_size_reached",
    "unauthorized_char",
    "cannot_delete",
    "invalid_notation",
)

DEFAULT_MESSAGES: Mapping[str, str] = {
    "max_size_reached": "Maximum number of characters reached.",
    "unauthorized_char": "Unauthorized character.",
    "cannot_delete": "Cannot be deleted.",
    "invalid_notation": "Invalid notation.",
}

MessageListener = Callable[[str, str], None]


@runtime_checkable
class MessageSource(Protocol):
    """Observable-like provider that pushes resolved message text."""

    def subscribe(self, callback: Callable[[str], None]) -> Any:
        ...


@runtime_checkable
class PendingMessage(Protocol):
    """Future-like provider resolved once (``concurrent.futures``/``asyncio``)."""

    def add_done_callback(self, callback: Callable[[Any], None]) -> Any:
        ...


class MaskMessages:
    """Latest message text per key, fed by literal or asynchronous overrides."""

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None) -> None:
        self._texts: Dict[str, str] = dict(DEFAULT_MESSAGES)
        self._listeners: List[MessageListener] = []
        for key, override in (overrides or {}).items():
            self.set_message(key, override)

    def __getattr__(self, name: str) -> str:
        texts = self.__dict__.get("_texts")
        if texts is not None and name in texts:
            return texts[name]
        raise AttributeError(name)

    def get(self, key: str) -> str:
        self._require_key(key)
        return self._texts[key]

    def as_dict(self) -> Dict[str, str]:
        return dict(self._texts)

    def add_listener(self, listener: MessageListener) -> None:
        """Call ``listener(key, text)`` whenever a message text changes."""

        self._listeners.append(listener)

    def remove_listener(self, listener: MessageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_message(self, key: str, override: Any) -> None:
        """Install ``override`` for ``key``.

        ``override`` may be plain text, an object with ``subscribe(callback)``
        or an object with ``add_done_callback(callback)``; ``None`` keeps the
        current text.
        """

        self._require_key(key)
        if override is None:
            return
        if isinstance(override, str):
            self._update(key, override)
            return
        if isinstance(override, MessageSource):
            override.subscribe(lambda text: self._update(key, text))
            return
        if isinstance(override, PendingMessage):
            override.add_done_callback(lambda future: self._resolve_future(key, future))
            return
        raise TypeError(
            f"message override for {key!r} must be text, observable or future, "
            f"received {type(override)!r}"
        )

    def _resolve_future(self, key: str, future: Any) -> None:
        if future.cancelled():
            LOGGER.debug("message override for %s was cancelled", key)
            return
        error = future.exception()
        if error is not None:
            LOGGER.warning("message override for %s failed: %s", key, error)
            return
        self._update(key, future.result())

    def _update(self, key: str, text: Any) -> None:
        if not isinstance(text, str):
            raise TypeError(f"message text for {key!r} must be a string")
        self._texts[key] = text
        for listener in list(self._listeners):
            listener(key, text)

    @staticmethod
    def _require_key(key: str) -> None:
        if key not in MESSAGE_KEYS:
            raise KeyError(f"unknown message key: {key!r}")


__all__ = [
    "DEFAULT_MESSAGES",
    "MESSAGE_KEYS",
    "MaskMessages",
    "MessageSource",
    "PendingMessage",
]
