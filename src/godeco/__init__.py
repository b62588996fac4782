"""godeco: generate decorator implementations for Go interfaces."""

from __future__ import annotations

from . import errors
from .config import DecoratorConfig
from .generate import generate_decorator, write_decorator

__all__ = [
    "DecoratorConfig",
    "errors",
    "generate_decorator",
    "write_decorator",
]
