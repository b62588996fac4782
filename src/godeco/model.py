"""Signature model of a scanned Go source file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InterfaceNotFoundError, ScanError


@dataclass(frozen=True)
class GoType:
    # Go type expression as written, e.g. `*os.File` or `map[string]func() int`.
    type: str
    # Nested descriptors (element, key/value, func params then results, ...).
    inner: tuple["GoType", ...] = ()
    # Parsed name, replaced by a synthetic one before rendering.
    name: str | None = None

    @property
    def variadic(self) -> bool:
        return self.type.startswith("...")


@dataclass(frozen=True)
class GoMethod:
    name: str
    params: tuple[GoType, ...]
    results: tuple[GoType, ...]


@dataclass(frozen=True)
class GoImport:
    name: str | None  # alias; None for a plain import
    path: str  # unquoted import path

    @property
    def prefix(self) -> str:
        """Identifier used in code to qualify references to this import."""
        if self.name:
            return self.name
        return self.path.rsplit("/", 1)[-1]

    def render(self) -> str:
        if self.name:
            return f'{self.name} "{self.path}"'
        return f'"{self.path}"'


@dataclass(frozen=True)
class GoInterface:
    name: str
    package: str
    methods: tuple[GoMethod, ...]
    embeds: tuple[str, ...] = ()


@dataclass(frozen=True)
class GoFile:
    path: str
    package: str
    imports: tuple[GoImport, ...]
    interfaces: tuple[GoInterface, ...]

    def find_interface(self, name: str) -> GoInterface:
        for iface in self.interfaces:
            if iface.name == name:
                return iface
        raise InterfaceNotFoundError(f"interface {name} not found in {self.path}")

    @classmethod
    def from_scan(cls, obj: Any, *, path: str) -> "GoFile":
        """Build the model from the scanner's JSON object."""
        if not isinstance(obj, dict):
            raise ScanError("go scan output is not an object")
        package = obj.get("package")
        if not isinstance(package, str) or not package:
            raise ScanError("go scan output is missing the package name")

        imports: list[GoImport] = []
        for item in obj.get("imports") or []:
            if not isinstance(item, dict):
                continue
            ipath = item.get("path")
            alias = item.get("name")
            if not isinstance(ipath, str) or not ipath:
                continue
            imports.append(GoImport(name=alias if isinstance(alias, str) and alias else None, path=ipath))

        interfaces: list[GoInterface] = []
        for item in obj.get("interfaces") or []:
            if not isinstance(item, dict):
                continue
            name = item.get("name")
            if not isinstance(name, str) or not name:
                continue
            methods = tuple(_method_from_scan(m) for m in item.get("methods") or [])
            embeds = tuple(e for e in item.get("embeds") or [] if isinstance(e, str) and e)
            interfaces.append(GoInterface(name=name, package=package, methods=methods, embeds=embeds))

        return cls(path=path, package=package, imports=tuple(imports), interfaces=tuple(interfaces))


def _method_from_scan(obj: Any) -> GoMethod:
    if not isinstance(obj, dict) or not isinstance(obj.get("name"), str):
        raise ScanError(f"malformed method in go scan output: {obj!r}")
    return GoMethod(
        name=obj["name"],
        params=tuple(_type_from_scan(t) for t in obj.get("params") or []),
        results=tuple(_type_from_scan(t) for t in obj.get("results") or []),
    )


def _type_from_scan(obj: Any) -> GoType:
    if not isinstance(obj, dict) or not isinstance(obj.get("type"), str) or not obj["type"]:
        raise ScanError(f"malformed type in go scan output: {obj!r}")
    name = obj.get("name")
    return GoType(
        type=obj["type"],
        inner=tuple(_type_from_scan(t) for t in obj.get("inner") or []),
        name=name if isinstance(name, str) and name else None,
    )
