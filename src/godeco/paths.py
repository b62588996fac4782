from __future__ import annotations

import os


def go_executable() -> str:
    """Return the `go` command used to run the source scanner.

    Override with `GODECO_GO`.
    """
    override = os.environ.get("GODECO_GO")
    if override:
        return override
    return "go"


def gofmt_executable() -> str:
    """Return the `gofmt` command used to format generated source.

    Override with `GODECO_GOFMT`.
    """
    override = os.environ.get("GODECO_GOFMT")
    if override:
        return override
    return "gofmt"
