"""Positional string masks: filtering, validation, prediction and conversion."""
from __future__ import annotations

from .catalog_config import (
    CatalogConfig,
    CatalogConfigError,
    load_catalog_config,
    parse_notation,
)
from .controller import (
    BufferState,
    EditController,
    EditError,
    EditIntent,
    HostBinding,
    PasteResult,
    RejectedCharacter,
)
from .engine import (
    MaskingEngine,
    convert_notation,
    convert_value,
    filter_value,
    predict_next_character,
    validate_value,
)
from .error_timer import ERROR_CLEAR_DELAY, ErrorClearTimer
from .messages import DEFAULT_MESSAGES, MESSAGE_KEYS, MaskMessages
from .notation import (
    Notation,
    NotationCatalog,
    NotationConfigError,
    NotationNotFoundError,
    Separator,
    find_notation,
)

__all__ = [
    "BufferState",
    "CatalogConfig",
    "CatalogConfigError",
    "DEFAULT_MESSAGES",
    "ERROR_CLEAR_DELAY",
    "EditController",
    "EditError",
    "EditIntent",
    "ErrorClearTimer",
    "HostBinding",
    "MESSAGE_KEYS",
    "MaskMessages",
    "MaskingEngine",
    "Notation",
    "NotationCatalog",
    "NotationConfigError",
    "NotationNotFoundError",
    "PasteResult",
    "RejectedCharacter",
    "Separator",
    "convert_notation",
    "convert_value",
    "filter_value",
    "find_notation",
    "load_catalog_config",
    "parse_notation",
    "predict_next_character",
    "validate_value",
]
