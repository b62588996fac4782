from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError


@dataclass(frozen=True)
class DecoratorConfig:
    """Everything one generator run needs, fixed up front."""

    type_name: str
    path: Path
    imports: tuple[str, ...] = ()
    out: Path | None = None

    @classmethod
    def create(
        cls,
        *,
        type_name: str,
        path: str | Path,
        imports: Iterable[str] = (),
        out: str | Path | None = None,
    ) -> "DecoratorConfig":
        type_name = (type_name or "").strip()
        if not type_name:
            raise ConfigError("interface name is required")
        path = Path(path)
        if path.suffix != ".go":
            raise ConfigError(f"expected a .go source file, got {path}")
        return cls(
            type_name=type_name,
            path=path,
            imports=tuple(normalize_import(i) for i in imports),
            out=Path(out) if out is not None else None,
        )


def normalize_import(value: str) -> str:
    # Accept both `os` and `"os"` on the command line.
    value = value.strip().strip('"')
    if not value:
        raise ConfigError("import path must not be empty")
    return value
