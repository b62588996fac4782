"""Domain-specific errors for godeco."""

from __future__ import annotations


class GoDecoError(Exception):
    """Base error for godeco."""


class ConfigError(GoDecoError):
    """Raised when the generator is configured with invalid options."""


class ParseError(GoDecoError):
    """Raised when a Go source file cannot be read or parsed."""


class ScanError(ParseError):
    """Raised when the Go scanner program fails or its output is malformed."""


class InterfaceNotFoundError(GoDecoError):
    """Raised when the requested interface is not declared in the source file."""


class FormatError(GoDecoError):
    """Raised when gofmt rejects generated source (or cannot be run)."""
