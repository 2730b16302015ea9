from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hackasm.assembler import assemble
from hackasm.config import AssemblerOptions, ConfigError, load_options
from hackasm.model import AssemblyError


log = logging.getLogger(__name__)

STDIO = "-"


def read_source(path: Optional[str] = None) -> str:
    if path is None or path == STDIO:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def write_output(text: str, path: Optional[str] = None) -> None:
    if path is None or path == STDIO:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    Path(path).write_text(text, encoding="utf-8")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hackasm",
        description="Assemble Hack assembly into binary machine words.",
    )
    parser.add_argument("input", nargs="?", default=STDIO, help="Assembly source (.asm), '-' for stdin")
    parser.add_argument("-o", "--output", default=STDIO, help="Output file (.hack), '-' for stdout")
    parser.add_argument("-c", "--config", help="JSON options file")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Allow duplicate labels (last wins) and encode unknown destinations as 000",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details to stderr")
    return parser


def _options_from_args(args: argparse.Namespace) -> AssemblerOptions:
    if args.config:
        return load_options(args.config)
    if args.lenient:
        return AssemblerOptions.lenient()
    return AssemblerOptions()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        options = _options_from_args(args)
        source = read_source(args.input)
        words = assemble(source, options)
    except ConfigError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except AssemblyError as exc:
        print(f"error: {exc.describe()}", file=sys.stderr)
        return 1
    except UnicodeDecodeError:
        print(f"error: {args.input}: not valid UTF-8", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    output = "\n".join(words) + "\n" if words else ""
    try:
        write_output(output, args.output)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    log.info("wrote %d word(s) to %s", len(words), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
