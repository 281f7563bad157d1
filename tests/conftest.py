"""Pytest configuration to ensure the stringmask package is importable."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

import sitecustomize  # noqa: F401,E402  # Ensure src/ is on sys.path via sitecustomize hook.

from stringmask.notation import Notation, NotationCatalog, Separator  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def serial_number() -> Notation:
    return Notation(
        name="SerialNumber",
        input_filter="[^0-9]+",
        prefix="SN",
        total_length=15,
        separators=(
            Separator("-", 3),
            Separator("-", 7),
            Separator("-", 11),
        ),
    )


@pytest.fixture
def activation_code() -> Notation:
    return Notation(
        name="ActivationCode",
        input_filter="[^A-Z0-9]+",
        prefix="SN",
        total_length=15,
        separators=(
            Separator("-", 3),
            Separator("-", 7),
            Separator("-", 11),
        ),
    )


@pytest.fixture
def compact_serial() -> Notation:
    return Notation(
        name="CompactSerial",
        input_filter="[^0-9]+",
        prefix="S/",
        total_length=14,
        separators=(Separator(".", 7), Separator(".", 11)),
    )


@pytest.fixture
def plain_code() -> Notation:
    return Notation(
        name="PlainCode",
        input_filter="[^0-9]+",
        total_length=7,
        separators=(Separator(":", 4),),
    )


@pytest.fixture
def catalog(serial_number, activation_code, compact_serial, plain_code) -> NotationCatalog:
    return NotationCatalog([serial_number, activation_code, compact_serial, plain_code])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
