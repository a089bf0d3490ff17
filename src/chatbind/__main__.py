"""Command line for chatbind.

Examples:
- python -m chatbind extract movie_details response.json
- curl ... | python -m chatbind extract recipe --diagnostics
- python -m chatbind schemas
- python -m chatbind details "The Third Man"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, TextIO

from chatbind.assistant import Assistant
from chatbind.config import Config
from chatbind.errors import APIError, ConfigurationError
from chatbind.extraction import extract
from chatbind.schemas import available_schemas, get_schema

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatbind.extraction import ExtractionResult

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_ERROR = 2


def _print_result(result: ExtractionResult, *, out: TextIO, err: TextIO) -> int:
    if result.diagnostics is not None:
        for v in result.diagnostics.violations:
            print(f"[{v.severity}] {v.message}", file=err)
    if result.record is None:
        print(f"no result: {result.failure}", file=err)
        return EXIT_NO_RESULT
    print(json.dumps(result.record, indent=2, ensure_ascii=False), file=out)
    return EXIT_OK


def _cmd_extract(args: argparse.Namespace) -> int:
    schema = get_schema(args.schema)
    if args.file is None or args.file == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(args.file).read_text(encoding="utf-8")
    result = extract(raw, schema, diagnostics=args.diagnostics)
    return _print_result(result, out=sys.stdout, err=sys.stderr)


def _cmd_schemas(_args: argparse.Namespace) -> int:
    for name in available_schemas():
        schema = get_schema(name)
        print(f"{name}: {', '.join(schema.field_names)}")
    return EXIT_OK


async def _ask(args: argparse.Namespace) -> int:
    async with Assistant(Config(model=args.model)) as assistant:
        if args.command == "movie":
            summary = await assistant.movie_summary(args.subject)
            if summary is None:
                print("no summary in reply", file=sys.stderr)
                return EXIT_NO_RESULT
            print(summary)
            return EXIT_OK
        if args.command == "details":
            result = await assistant.movie_details(args.subject)
        else:
            result = await assistant.recipe(args.subject)
    return _print_result(result, out=sys.stdout, err=sys.stderr)


def _cmd_ask(args: argparse.Namespace) -> int:
    return asyncio.run(_ask(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatbind",
        description="Recover schema-conformant records from chat-completion output",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Extract a record from a raw completion body")
    p_extract.add_argument("schema", help="Schema name (see `schemas`)")
    p_extract.add_argument("file", nargs="?", help="Body file; stdin when omitted or '-'")
    p_extract.add_argument(
        "--diagnostics", action="store_true", help="Print violations to stderr"
    )
    p_extract.set_defaults(func=_cmd_extract)

    p_schemas = sub.add_parser("schemas", help="List declared schemas")
    p_schemas.set_defaults(func=_cmd_schemas)

    for name, help_text, metavar in (
        ("movie", "Summarize a movie", "TITLE"),
        ("details", "Fetch movie details", "TITLE"),
        ("recipe", "Fetch a recipe", "DISH"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("subject", metavar=metavar)
        p.add_argument("--model", default=None, help="Model override")
        p.set_defaults(func=_cmd_ask)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (APIError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        if e.hint:
            print(f"hint: {e.hint}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
