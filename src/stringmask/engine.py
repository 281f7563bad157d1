"""Filtering, validation, separator prediction and notation conversion."""

from __future__ import annotations

import logging
from typing import Iterable, Union

from .notation import (
    Notation,
    NotationCatalog,
    NotationNotFoundError,
    Separator,
)

LOGGER = logging.getLogger(__name__)

CatalogLike = Union[NotationCatalog, Iterable[Notation]]


def filter_value(raw: str, notation: Notation) -> str:
    """Uppercase ``raw`` and strip every character the notation filters out."""

    return notation.filter_pattern.sub("", raw.upper())


def validate_value(value: str, notation: Notation) -> bool:
    """Return ``True`` when ``value`` is a complete instance of ``notation``."""

    if not value or len(value) != notation.total_length:
        return False
    if not value.startswith(notation.prefix):
        return False
    return all(
        value[separator.index] == separator.character
        for separator in notation.separators
    )


def predict_next_character(value: str, notation: Notation) -> str:
    """Return the separator that belongs right after ``value``, or ``""``."""

    separator = notation.separator_at(len(value) + 1)
    if separator is None:
        return ""
    return separator.character


def _remove_separators(value: str, separators: Iterable[Separator]) -> str:
    # Each removal shifts the later separators one slot to the left.
    for offset, separator in enumerate(separators):
        index = separator.index - offset
        if len(value) >= index:
            value = value[:index] + value[index + 1 :]
    return value


def _insert_separators(value: str, separators: Iterable[Separator]) -> str:
    for separator in separators:
        index = separator.index
        if len(value) >= index:
            value = value[:index] + separator.character + value[index:]
    return value


def _remove_prefix(value: str, prefix: str) -> str:
    if prefix and value.startswith(prefix):
        return value[len(prefix) :]
    return value


def convert_value(value: str, source: Notation, target: Notation) -> str:
    """Re-express ``value`` written in ``source`` notation using ``target``.

    Values that do not validate against ``source`` are returned untouched.
    """

    if not validate_value(value, source):
        LOGGER.debug("skipping conversion of %r: not a valid %s value", value, source.name)
        return value
    payload = _remove_prefix(_remove_separators(value, source.separators), source.prefix)
    return _insert_separators(f"{target.prefix}{payload}", target.separators)


def _as_catalog(catalog: CatalogLike) -> NotationCatalog:
    if isinstance(catalog, NotationCatalog):
        return catalog
    return NotationCatalog(catalog)


def convert_notation(
    value: str,
    source_name: str,
    target_name: str,
    catalog: CatalogLike,
) -> str:
    """Convert ``value`` between two notations looked up by name in ``catalog``."""

    return MaskingEngine(source_name, catalog).convert_notation(value, target_name)


class MaskingEngine:
    """Mask queries bound to the notation selected from a catalog."""

    def __init__(self, notation_name: str, catalog: CatalogLike) -> None:
        self.catalog = _as_catalog(catalog)
        self.notation = self.catalog.require(notation_name)

    def __repr__(self) -> str:
        return f"MaskingEngine({self.notation.name!r})"

    @property
    def prefix(self) -> str:
        return self.notation.prefix

    @property
    def total_length(self) -> int:
        return self.notation.total_length

    def filter(self, raw: str) -> str:
        return filter_value(raw, self.notation)

    def validate(self, value: str) -> bool:
        return validate_value(value, self.notation)

    def predict_next_character(self, value: str) -> str:
        return predict_next_character(value, self.notation)

    def convert_notation(self, value: str, target_name: str) -> str:
        """Convert a value of the bound notation into ``target_name`` notation.

        Invalid values come back unchanged; an unknown target name raises
        :class:`NotationNotFoundError` so a misconfigured catalog is never
        mistaken for an invalid value.
        """

        if not self.validate(value):
            return value
        target = self.catalog.get(target_name)
        if target is None:
            raise NotationNotFoundError(
                target_name,
                f"string mask conversion failed: no string mask found with name {target_name!r}",
            )
        return convert_value(value, self.notation, target)


__all__ = [
    "MaskingEngine",
    "convert_notation",
    "convert_value",
    "filter_value",
    "predict_next_character",
    "validate_value",
]
