from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from pathlib import Path

from .errors import GoDecoError

logger = logging.getLogger("godeco")


def _version() -> str:
    try:
        return importlib.metadata.version("godeco")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="godeco",
        description="Generate a decorator implementation for a Go interface.",
        epilog=(
            "For example:\n\tgodeco --type Sample sample.go > sample_decorator.go\n\n"
            "Embedded interfaces declared in the same file are decorated too. Embedded\n"
            "interfaces from other packages (e.g. io.Reader) are skipped with a warning;\n"
            "the generated type does not implement the interface until their methods\n"
            "are added by hand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="Go source file declaring the interface.")
    parser.add_argument("--type", "-t", dest="type_name", required=True, help="Interface name.")
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional path to import (can be repeated).",
    )
    parser.add_argument("--out", "-o", default=None, help="Write output to a file instead of stdout.")
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv) to stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(format="godeco: %(message)s", level=level)

    from .config import DecoratorConfig
    from .generate import generate_decorator

    try:
        config = DecoratorConfig.create(
            type_name=args.type_name,
            path=args.file,
            imports=args.imports,
            out=args.out,
        )
        output = generate_decorator(config)
    except GoDecoError as e:
        logger.error("%s", e)
        raise SystemExit(1) from None

    if config.out is not None:
        out_file = Path(config.out)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(output, encoding="utf-8")
        return
    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
