from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, replace

from .model import GoMethod, GoType

ERROR_TYPE = "error"


class ReturnConvention(enum.Enum):
    PLAIN = "plain"
    ERROR_TERMINATED = "error"


@dataclass(frozen=True)
class NamedMethod:
    method: GoMethod
    convention: ReturnConvention


def classify(method: GoMethod) -> ReturnConvention:
    if method.results and method.results[-1].type == ERROR_TYPE:
        return ReturnConvention.ERROR_TERMINATED
    return ReturnConvention.PLAIN


def param_name(i: int, t: GoType, count: int) -> str:
    return f"p{i}"


def result_name(i: int, t: GoType, count: int) -> str:
    if i == count - 1 and t.type == ERROR_TYPE:
        return "err"
    return f"v{i}"


def _rename(fields: tuple[GoType, ...], namer: Callable[[int, GoType, int], str]) -> tuple[GoType, ...]:
    count = len(fields)
    return tuple(replace(t, name=namer(i, t, count)) for i, t in enumerate(fields))


def normalize_method(method: GoMethod) -> NamedMethod:
    """Give every parameter and result a synthetic name.

    Source-level names are discarded: they may be missing, blank or shadow
    identifiers used by the generated body. The input method is not modified.
    """
    convention = classify(method)
    named = replace(
        method,
        params=_rename(method.params, param_name),
        results=_rename(method.results, result_name),
    )
    return NamedMethod(method=named, convention=convention)
