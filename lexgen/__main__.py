"""Entry point: python -m lexgen [SCHEMA_DIR] [OUTPUT_DIR]

Reads every Lexicon document under lexicons/, generates Python
dataclasses under generated/.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .codegen import build
from .errors import LexiconError

logger = logging.getLogger("lexgen")

DEFAULT_SCHEMA_DIR = Path(__file__).parent.parent / "lexicons"
DEFAULT_OUTPUT_DIR = Path(__file__).parent.parent / "generated"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lexgen",
        description="Compile Lexicon schema documents into Python dataclasses.",
    )
    parser.add_argument(
        "schema_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_SCHEMA_DIR,
        help="directory containing Lexicon JSON documents",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="directory receiving the generated modules",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every definition")
    args = parser.parse_args(argv)
    if not args.schema_dir.is_dir():
        parser.error(f"schema directory not found: {args.schema_dir}")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        written = build(args.schema_dir, args.output_dir)
    except LexiconError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Generated %d modules in %s", len(written), args.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
