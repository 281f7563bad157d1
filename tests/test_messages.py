from __future__ import annotations

import asyncio
from concurrent.futures import Future

import pytest

from stringmask.messages import DEFAULT_MESSAGES, MaskMessages


class FakeObservable:
    def __init__(self) -> None:
        self.callbacks = []

    def subscribe(self, callback) -> None:
        self.callbacks.append(callback)

    def emit(self, text: str) -> None:
        for callback in self.callbacks:
            callback(text)


def test_defaults_cover_every_slot() -> None:
    messages = MaskMessages()

    assert messages.as_dict() == dict(DEFAULT_MESSAGES)
    assert messages.max_size_reached == "Maximum number of characters reached."
    assert messages.unauthorized_char == "Unauthorized character."
    assert messages.cannot_delete == "Cannot be deleted."
    assert messages.invalid_notation == "Invalid notation."


def test_literal_override_replaces_default() -> None:
    messages = MaskMessages({"cannot_delete": "Suppression impossible.", "invalid_notation": None})

    assert messages.get("cannot_delete") == "Suppression impossible."
    assert messages.get("invalid_notation") == "Invalid notation."


def test_observable_override_tracks_latest_text() -> None:
    source = FakeObservable()
    messages = MaskMessages({"unauthorized_char": source})
    updates = []
    messages.add_listener(lambda key, text: updates.append((key, text)))

    assert messages.unauthorized_char == "Unauthorized character."

    source.emit("Caractère non autorisé.")
    source.emit("Zeichen nicht erlaubt.")

    assert messages.unauthorized_char == "Zeichen nicht erlaubt."
    assert updates == [
        ("unauthorized_char", "Caractère non autorisé."),
        ("unauthorized_char", "Zeichen nicht erlaubt."),
    ]


def test_future_override_resolves_once_done() -> None:
    future: Future[str] = Future()
    messages = MaskMessages({"max_size_reached": future})

    assert messages.max_size_reached == DEFAULT_MESSAGES["max_size_reached"]

    future.set_result("Longueur maximale atteinte.")

    assert messages.max_size_reached == "Longueur maximale atteinte."


def test_failed_future_keeps_previous_text() -> None:
    future: Future[str] = Future()
    messages = MaskMessages({"max_size_reached": future})

    future.set_exception(RuntimeError("translation service down"))

    assert messages.max_size_reached == DEFAULT_MESSAGES["max_size_reached"]


def test_asyncio_future_override() -> None:
    async def scenario() -> str:
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        messages = MaskMessages({"invalid_notation": future})
        future.set_result("Ungültiges Format.")
        await asyncio.sleep(0)
        return messages.invalid_notation

    assert asyncio.run(scenario()) == "Ungültiges Format."


def test_remove_listener_stops_notifications() -> None:
    messages = MaskMessages()
    updates = []

    def listener(key: str, text: str) -> None:
        updates.append(key)

    messages.add_listener(listener)
    messages.set_message("cannot_delete", "first")
    messages.remove_listener(listener)
    messages.set_message("cannot_delete", "second")

    assert updates == ["cannot_delete"]
    assert messages.cannot_delete == "second"


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(KeyError, match="unknown message key"):
        MaskMessages({"too_long": "nope"})
    with pytest.raises(KeyError):
        MaskMessages().get("too_long")


def test_unsupported_override_type_is_rejected() -> None:
    with pytest.raises(TypeError, match="text, observable or future"):
        MaskMessages({"cannot_delete": 42})


def test_missing_attribute_raises_attribute_error() -> None:
    with pytest.raises(AttributeError):
        MaskMessages().not_a_message
