"""Assemble a decorator source file and run the whole generation pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from .config import DecoratorConfig
from .errors import FormatError
from .gofmt import format_source
from .model import GoFile, GoImport, GoInterface, GoMethod
from .naming import normalize_method
from .render import render_method, render_struct
from .resolve import lookup_imports
from .scan import scan_file

logger = logging.getLogger(__name__)

HEADER = "// Code generated by godeco. DO NOT EDIT."


def write_decorator(
    iface: GoInterface,
    all_imports: Sequence[GoImport],
    requests: Sequence[str] = (),
) -> str:
    """Return the unformatted decorator source for `iface`."""
    parts: list[str] = []
    parts.append(HEADER + "\n")
    parts.append(f"package {iface.package}\n")

    imports = lookup_imports(iface, all_imports, requests)
    parts.append("import (\n")
    for entry in imports:
        parts.append(f"\t{entry}\n")
    parts.append(")\n")

    parts.append(render_struct(iface.name))
    for method in iface.methods:
        parts.append(render_method(normalize_method(method), iface.name))
    return "".join(parts)


def format_or_raw(src: str, *, gofmt: str | None = None) -> str:
    try:
        return format_source(src, gofmt=gofmt)
    except FormatError as e:
        # Generated code should always be valid Go; returning it unformatted
        # lets the user compile it and see what went wrong.
        logger.warning("internal error: invalid Go generated: %s", e)
        logger.warning("compile the package to analyze the error")
        return src


def expand_embeds(go_file: GoFile, iface: GoInterface) -> GoInterface:
    """Inline the methods of interfaces embedded in `iface`.

    Only interfaces declared in the same file can be expanded; anything else
    is skipped with a warning.
    """
    if not iface.embeds:
        return iface

    methods: list[GoMethod] = []
    seen_methods: set[str] = set()
    visited: set[str] = set()

    def collect(current: GoInterface) -> None:
        visited.add(current.name)
        for m in current.methods:
            if m.name not in seen_methods:
                seen_methods.add(m.name)
                methods.append(m)
        for embed in current.embeds:
            if embed in visited:
                continue
            local = next((i for i in go_file.interfaces if i.name == embed), None)
            if local is None:
                logger.warning(
                    "embedded interface %s is not declared in %s; its methods are not decorated "
                    "and %sDecorator will not implement %s until they are added by hand",
                    embed,
                    go_file.path,
                    iface.name,
                    iface.name,
                )
                continue
            logger.debug("expanding embedded interface %s into %s", embed, iface.name)
            collect(local)

    collect(iface)
    return replace(iface, methods=tuple(methods), embeds=())


def generate_decorator(config: DecoratorConfig, *, go: str | None = None, gofmt: str | None = None) -> str:
    """Scan the configured file and return formatted decorator source."""
    logger.info("Type Name: %s", config.type_name)
    logger.info("Searching %s", config.path)
    logger.info("Additional paths `%s`", ",".join(config.imports))

    go_file = scan_file(path=config.path, go=go)
    iface = expand_embeds(go_file, go_file.find_interface(config.type_name))

    src = write_decorator(iface, go_file.imports, config.imports)
    output = format_or_raw(src, gofmt=gofmt)
    logger.info("len: %d", len(output))
    return output
