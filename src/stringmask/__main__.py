"""Entry point for ``python -m stringmask``."""
from __future__ import annotations

from .runtime.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
