"""Render the decorator struct and its forwarding methods as Go source."""

from __future__ import annotations

from collections.abc import Sequence

from .model import GoType
from .naming import NamedMethod, ReturnConvention

DECORATOR_SUFFIX = "Decorator"
RECEIVER = "d"


def decorator_name(iface_name: str) -> str:
    return f"{iface_name}{DECORATOR_SUFFIX}"


def format_name_and_type(fields: Sequence[GoType]) -> str:
    return ", ".join(f"{t.name} {t.type}" for t in fields)


def format_names(fields: Sequence[GoType], *, expand_ellipsis: bool = False) -> str:
    names: list[str] = []
    for t in fields:
        name = t.name or "_"
        if expand_ellipsis and t.variadic:
            name += "..."
        names.append(name)
    return ", ".join(names)


def render_struct(iface_name: str) -> str:
    lines = [
        f"type {decorator_name(iface_name)} struct {{",
        f"\tInner {iface_name}",
        f"\t{DECORATOR_SUFFIX} func(name string, call func() error) error",
        "}",
        "",
    ]
    return "\n".join(lines)


def render_method(named: NamedMethod, iface_name: str) -> str:
    """Render one forwarding method.

    Every call goes through `Decorator(name, call)`. For error-terminated
    methods the interceptor's error becomes the method's `err`; otherwise it
    is discarded since the signature has nowhere to put it.
    """
    method = named.method
    params = format_name_and_type(method.params)
    results = format_name_and_type(method.results)
    pass_args = format_names(method.params, expand_ellipsis=True)
    return_args = format_names(method.results)

    call = f"{RECEIVER}.Inner.{method.name}({pass_args})"
    if method.results:
        call = f"{return_args} = {call}"

    if named.convention is ReturnConvention.ERROR_TERMINATED:
        closure_return = "return err"
        intercept = f'err = {RECEIVER}.{DECORATOR_SUFFIX}("{method.name}", call)'
    else:
        closure_return = "return nil"
        intercept = f'_ = {RECEIVER}.{DECORATOR_SUFFIX}("{method.name}", call)'

    outer_return = f"return {return_args}" if return_args else "return"

    lines = [
        f"func ({RECEIVER} *{decorator_name(iface_name)}) {method.name}({params}) ({results}) {{",
        "\tcall := func() error {",
        f"\t\t{call}",
        f"\t\t{closure_return}",
        "\t}",
        f"\t{intercept}",
        f"\t{outer_return}",
        "}",
        "",
    ]
    return "\n".join(lines)
