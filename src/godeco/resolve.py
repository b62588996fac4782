"""Resolve which imports a decorator needs from the types its methods reference."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .model import GoImport, GoInterface, GoType

logger = logging.getLogger(__name__)


def select_types(t: GoType) -> list[str]:
    """Return the leaf type names of a descriptor.

    Composite descriptors (`*T`, `[]T`, `map[K]V`, `func(...)`) contribute only
    the leaves of their children, never their own syntax.
    """
    if not t.inner:
        return [t.type]
    out: list[str] = []
    for child in t.inner:
        out.extend(select_types(child))
    return out


def select_prefixes(type_names: Iterable[str]) -> list[str]:
    out: list[str] = []
    for name in type_names:
        name = name.strip("*")
        index = name.find(".")
        if index > -1:
            out.append(name[:index])
    return out


def find_packages(iface: GoInterface) -> list[str]:
    """Candidate package prefixes referenced by an interface, in reference order."""
    types: list[str] = []
    for method in iface.methods:
        for field in method.params:
            types.extend(select_types(field))
        for field in method.results:
            types.extend(select_types(field))
    return select_prefixes(types)


def select_imports(all_imports: Sequence[GoImport], prefixes: Iterable[str]) -> list[str]:
    # Unmatched prefixes are builtins or same-package types; the source already compiles.
    out: list[str] = []
    seen: set[GoImport] = set()
    for prefix in prefixes:
        matched = False
        for imp in all_imports:
            if imp.prefix != prefix:
                continue
            matched = True
            if imp not in seen:
                seen.add(imp)
                out.append(imp.render())
        if not matched:
            logger.debug("no import matches prefix %r", prefix)
    return out


def lookup_imports(
    iface: GoInterface,
    all_imports: Sequence[GoImport],
    requests: Sequence[str] = (),
) -> list[str]:
    """Return the import block entries for a decorator of `iface`.

    Requested imports come first and are never deduplicated against the
    resolved ones; gofmt is left to deal with repeats.
    """
    imports = [f'"{r}"' for r in requests]
    imports.extend(select_imports(all_imports, find_packages(iface)))
    return imports
