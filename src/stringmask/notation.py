"""Static notation descriptions and the catalog they are looked up from."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple


class NotationConfigError(ValueError):
    """Raised when a notation or catalog definition is malformed."""


class NotationNotFoundError(LookupError):
    """Raised when a notation name is absent from the catalog."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"no string mask found with name {name!r}")


@dataclass(frozen=True)
class Separator:
    """Literal character pinned to a 1-based position of a complete value."""

    character: str
    position: int

    def __post_init__(self) -> None:
        if not isinstance(self.character, str) or len(self.character) != 1:
            raise NotationConfigError(
                f"separator character must be a single character, received {self.character!r}"
            )
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise NotationConfigError(
                f"separator position must be an integer, received {self.position!r}"
            )
        if self.position < 1:
            raise NotationConfigError(
                f"separator position must be 1-based, received {self.position}"
            )

    @property
    def index(self) -> int:
        """0-based offset of the separator inside a complete value."""

        return self.position - 1


@dataclass(frozen=True)
class Notation:
    """Named mask: character filter, prefix, exact length and separators.

    ``input_filter`` is a regular expression matching the characters to strip
    from raw input after it has been uppercased, e.g. ``"[^0-9]+"`` keeps
    digits only.
    """

    name: str
    input_filter: str
    prefix: str = ""
    total_length: int = 0
    separators: Tuple[Separator, ...] = ()
    _filter_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise NotationConfigError("notation name must be non-empty text")
        if not isinstance(self.prefix, str):
            raise NotationConfigError(f"{self.name}: prefix must be text")
        if isinstance(self.total_length, bool) or not isinstance(self.total_length, int):
            raise NotationConfigError(f"{self.name}: total_length must be an integer")
        if self.total_length < 1:
            raise NotationConfigError(f"{self.name}: total_length must be positive")
        if len(self.prefix) > self.total_length:
            raise NotationConfigError(
                f"{self.name}: prefix {self.prefix!r} is longer than total_length {self.total_length}"
            )
        try:
            pattern = re.compile(self.input_filter)
        except (re.error, TypeError) as exc:
            raise NotationConfigError(
                f"{self.name}: invalid input filter {self.input_filter!r}: {exc}"
            ) from exc
        object.__setattr__(self, "_filter_pattern", pattern)
        object.__setattr__(self, "separators", self._ordered_separators(self.separators))

    def _ordered_separators(self, separators: Iterable[Separator]) -> Tuple[Separator, ...]:
        separators = tuple(separators)
        for separator in separators:
            if not isinstance(separator, Separator):
                raise NotationConfigError(
                    f"{self.name}: separators must be Separator objects, received {type(separator)!r}"
                )
        ordered = tuple(sorted(separators, key=lambda separator: separator.position))
        previous: Optional[Separator] = None
        for separator in ordered:
            if separator.position > self.total_length:
                raise NotationConfigError(
                    f"{self.name}: separator {separator.character!r} at position "
                    f"{separator.position} lies beyond total_length {self.total_length}"
                )
            if previous is not None:
                if separator.position == previous.position:
                    raise NotationConfigError(
                        f"{self.name}: two separators share position {separator.position}"
                    )
                if separator.position == previous.position + 1:
                    raise NotationConfigError(
                        f"{self.name}: separators at positions {previous.position} and "
                        f"{separator.position} are adjacent"
                    )
            previous = separator
        return ordered

    @property
    def filter_pattern(self) -> re.Pattern[str]:
        return self._filter_pattern

    @property
    def payload_length(self) -> int:
        """Number of characters a user types, excluding prefix and separators."""

        return self.total_length - len(self.prefix) - len(self.separators)

    def separator_at(self, position: int) -> Optional[Separator]:
        """Return the separator pinned to 1-based ``position`` if any."""

        for separator in self.separators:
            if separator.position == position:
                return separator
        return None


def find_notation(name: str, catalog: Iterable[Notation]) -> Optional[Notation]:
    """Return the notation called ``name`` from ``catalog`` or ``None``."""

    for notation in catalog:
        if notation.name == name:
            return notation
    return None


class NotationCatalog:
    """Immutable, ordered collection of notations unique by name."""

    def __init__(self, notations: Iterable[Notation] = ()) -> None:
        ordered: Dict[str, Notation] = {}
        for notation in notations:
            if not isinstance(notation, Notation):
                raise NotationConfigError(
                    f"catalog entries must be Notation objects, received {type(notation)!r}"
                )
            if notation.name in ordered:
                raise NotationConfigError(f"notation {notation.name!r} defined multiple times")
            ordered[notation.name] = notation
        self._notations: Tuple[Notation, ...] = tuple(ordered.values())

    def __iter__(self) -> Iterator[Notation]:
        return iter(self._notations)

    def __len__(self) -> int:
        return len(self._notations)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __repr__(self) -> str:
        return f"NotationCatalog({list(self.names())!r})"

    def names(self) -> Tuple[str, ...]:
        return tuple(notation.name for notation in self._notations)

    def get(self, name: str) -> Optional[Notation]:
        return find_notation(name, self._notations)

    def require(self, name: str) -> Notation:
        """Return the notation called ``name`` or raise :class:`NotationNotFoundError`."""

        notation = self.get(name)
        if notation is None:
            raise NotationNotFoundError(name)
        return notation


__all__ = [
    "Notation",
    "NotationCatalog",
    "NotationConfigError",
    "NotationNotFoundError",
    "Separator",
    "find_notation",
]
