"""Load notation catalogs and controller settings from TOML files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import tomllib

from .controller import EditController, HostBinding
from .engine import MaskingEngine
from .error_timer import ERROR_CLEAR_DELAY, ErrorClearTimer
from .messages import MESSAGE_KEYS, MaskMessages
from .notation import Notation, NotationCatalog, NotationConfigError, Separator

LOGGER = logging.getLogger(__name__)


class CatalogConfigError(ValueError):
    """Raised when a catalog configuration file fails validation."""


@dataclass(frozen=True)
class CatalogConfig:
    """Catalog plus the message overrides and timing read alongside it."""

    catalog: NotationCatalog
    messages: Mapping[str, str] = field(default_factory=dict)
    error_clear_delay: float = ERROR_CLEAR_DELAY

    def __post_init__(self) -> None:  # pragma: no cover - dataclass internals
        object.__setattr__(self, "messages", dict(self.messages))

    def build_messages(self) -> MaskMessages:
        return MaskMessages(self.messages)

    def build_engine(self, notation_name: str) -> MaskingEngine:
        return MaskingEngine(notation_name, self.catalog)

    def build_controller(
        self,
        notation_name: str,
        *,
        binding: HostBinding | None = None,
        timer: ErrorClearTimer | None = None,
    ) -> EditController:
        """Wire an :class:`EditController` for ``notation_name``."""

        return EditController(
            self.build_engine(notation_name),
            binding=binding,
            messages=self.build_messages(),
            timer=timer or ErrorClearTimer(delay=self.error_clear_delay),
        )


def load_catalog_config(config_path: Path) -> CatalogConfig:
    """Parse and validate the catalog configuration at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except tomllib.TOMLDecodeError as exc:
        raise CatalogConfigError(f"{config_path}: invalid TOML: {exc}") from exc

    notations = _parse_notations(raw_data.get("notations"))
    if not notations:
        raise CatalogConfigError("catalog configuration must define at least one [[notations]] entry")
    try:
        catalog = NotationCatalog(notations)
    except NotationConfigError as exc:
        raise CatalogConfigError(str(exc)) from exc

    config = CatalogConfig(
        catalog=catalog,
        messages=_parse_messages(raw_data.get("messages")),
        error_clear_delay=_parse_error_clear_delay(raw_data.get("settings")),
    )
    LOGGER.info("loaded %d notation(s) from %s", len(catalog), config_path)
    return config


def parse_notation(entry: Any, *, index: int = 1) -> Notation:
    """Build a :class:`Notation` from one ``[[notations]]`` table."""

    if not isinstance(entry, Mapping):
        raise CatalogConfigError(
            f"notation entry #{index} must be a mapping, received {type(entry)!r}"
        )
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise CatalogConfigError(f"notation entry #{index} must include a name")
    if "input_filter" not in entry:
        raise CatalogConfigError(f"notation {name!r} must include an input_filter")
    if "total_length" not in entry:
        raise CatalogConfigError(f"notation {name!r} must include a total_length")

    try:
        return Notation(
            name=name,
            input_filter=entry["input_filter"],
            prefix=entry.get("prefix", ""),
            total_length=entry["total_length"],
            separators=tuple(_parse_separators(entry.get("separators", []), name=name)),
        )
    except NotationConfigError as exc:
        raise CatalogConfigError(f"notation entry #{index}: {exc}") from exc


def _parse_notations(entries: Any) -> List[Notation]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise CatalogConfigError("[[notations]] must be an array of tables")
    return [parse_notation(entry, index=index) for index, entry in enumerate(entries, start=1)]


def _parse_separators(entries: Any, *, name: str) -> Iterable[Separator]:
    if not isinstance(entries, list):
        raise CatalogConfigError(f"notation {name!r}: separators must be an array")
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise CatalogConfigError(
                f"notation {name!r}: separator #{index} must be a table with character and position"
            )
        try:
            character = entry["character"]
            position = entry["position"]
        except KeyError as exc:
            raise CatalogConfigError(
                f"notation {name!r}: separator #{index} is missing {exc.args[0]!r}"
            ) from exc
        try:
            yield Separator(character=character, position=position)
        except NotationConfigError as exc:
            raise CatalogConfigError(f"notation {name!r}: {exc}") from exc


def _parse_messages(section: Any) -> Dict[str, str]:
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise CatalogConfigError("[messages] section must be a mapping")
    messages: Dict[str, str] = {}
    for key, text in section.items():
        if key not in MESSAGE_KEYS:
            allowed = ", ".join(MESSAGE_KEYS)
            raise CatalogConfigError(f"unknown message key {key!r} (expected one of {allowed})")
        if not isinstance(text, str):
            raise CatalogConfigError(f"message {key!r} must be a string")
        messages[key] = text
    return messages


def _parse_error_clear_delay(section: Any) -> float:
    if section is None:
        return ERROR_CLEAR_DELAY
    if not isinstance(section, Mapping):
        raise CatalogConfigError("[settings] section must be a mapping")
    raw_delay = section.get("error_clear_delay", ERROR_CLEAR_DELAY)
    if isinstance(raw_delay, bool) or not isinstance(raw_delay, (int, float)):
        raise CatalogConfigError("error_clear_delay must be a number of seconds")
    delay = float(raw_delay)
    if delay <= 0.0:
        raise CatalogConfigError("error_clear_delay must be positive")
    return delay


__all__ = [
    "CatalogConfig",
    "CatalogConfigError",
    "load_catalog_config",
    "parse_notation",
]
