"""Terminal and command-line hosts for the masking engine."""
from __future__ import annotations

from .cli import build_parser, main, parse_args, replay_keystrokes

__all__ = ["build_parser", "main", "parse_args", "replay_keystrokes"]
