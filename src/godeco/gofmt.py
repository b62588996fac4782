from __future__ import annotations

import subprocess

from .errors import FormatError
from .paths import gofmt_executable


def format_source(src: str, *, gofmt: str | None = None) -> str:
    """Format Go source with gofmt (indentation, import sorting).

    Raises FormatError if gofmt is missing or rejects the input.
    """
    prog = gofmt or gofmt_executable()
    try:
        proc = subprocess.run(
            [prog],
            input=src.encode("utf-8"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except FileNotFoundError as e:
        raise FormatError(
            f"gofmt not found (`{prog}` is missing from PATH). "
            "Install Go or set GODECO_GOFMT to the gofmt binary."
        ) from e

    stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
    stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
    if proc.returncode != 0:
        raise FormatError(stderr.strip() or f"gofmt exited with status {proc.returncode}")
    return stdout
