"""Command-line access to notation validation, conversion and editing."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, Sequence

from ..catalog_config import CatalogConfig, CatalogConfigError, load_catalog_config
from ..controller import EditController
from ..engine import convert_notation, validate_value
from ..notation import NotationNotFoundError

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_catalog_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--catalog",
        type=Path,
        required=True,
        help="Path to a TOML file describing the available notations",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stringmask", description=__doc__)
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    validate_parser = commands.add_parser("validate", help="Check a value against a notation")
    _add_catalog_argument(validate_parser)
    validate_parser.add_argument("--notation", required=True, help="Notation name")
    validate_parser.add_argument("value", help="Value to validate")

    convert_parser = commands.add_parser("convert", help="Convert a value between notations")
    _add_catalog_argument(convert_parser)
    convert_parser.add_argument("--from", dest="source", required=True, help="Notation of VALUE")
    convert_parser.add_argument("--to", dest="target", required=True, help="Notation to convert to")
    convert_parser.add_argument("value", help="Value to convert")

    type_parser = commands.add_parser(
        "type", help="Replay keystrokes through the edit controller"
    )
    _add_catalog_argument(type_parser)
    type_parser.add_argument("--notation", required=True, help="Notation name")
    type_parser.add_argument(
        "--paste",
        action="store_true",
        help="Deliver TEXT as a single paste instead of one keystroke per character",
    )
    type_parser.add_argument("text", help="Characters to type")

    field_parser = commands.add_parser("field", help="Edit a value in an interactive field")
    _add_catalog_argument(field_parser)
    field_parser.add_argument("--notation", required=True, help="Notation name")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the command line."""

    return build_parser().parse_args(argv)


def _format_step(label: str, controller: EditController) -> str:
    message = controller.error_message
    suffix = f"  [{message}]" if message else ""
    return f"{label:<8} {controller.value}{suffix}"


def replay_keystrokes(
    controller: EditController,
    text: str,
    *,
    paste: bool = False,
    stream: IO[str],
) -> bool:
    """Feed ``text`` into ``controller`` and print every resulting buffer."""

    controller.focus()
    print(_format_step("focus", controller), file=stream)
    if paste:
        controller.insert_text(text)
        print(_format_step("paste", controller), file=stream)
    else:
        for character in text:
            controller.insert_character(character)
            print(_format_step(repr(character), controller), file=stream)
    valid = controller.blur()
    print(_format_step("blur", controller), file=stream)
    return valid


def _run_command(args: argparse.Namespace, config: CatalogConfig, stream: IO[str]) -> int:
    if args.command == "validate":
        notation = config.catalog.require(args.notation)
        valid = validate_value(args.value, notation)
        print("valid" if valid else "invalid", file=stream)
        return 0 if valid else 1
    if args.command == "convert":
        print(convert_notation(args.value, args.source, args.target, config.catalog), file=stream)
        return 0
    if args.command == "type":
        controller = config.build_controller(args.notation)
        valid = replay_keystrokes(controller, args.text, paste=args.paste, stream=stream)
        return 0 if valid else 1
    if args.command == "field":
        from .console_field import MaskedFieldApp

        app = MaskedFieldApp(config.build_controller(args.notation))
        submitted = app.run()
        if submitted is None:
            return 1
        print(submitted, file=stream)
        return 0
    raise ValueError(f"unsupported command: {args.command!r}")


def main(argv: Sequence[str] | None = None, *, stream: IO[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    output = stream or sys.stdout
    try:
        config = load_catalog_config(args.catalog)
    except (OSError, CatalogConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    try:
        return _run_command(args, config, output)
    except NotationNotFoundError as exc:
        LOGGER.debug("notation lookup failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
