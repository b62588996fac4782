from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import pytest


def _go_file(tmp_path: Path) -> Path:
    p = tmp_path / "sample.go"
    p.write_text("package main\n", encoding="utf-8")
    return p


def test_scan_file_builds_model(monkeypatch, tmp_path: Path, sample_scan):
    from godeco.scan import scan_file

    monkeypatch.delenv("GODECO_GO", raising=False)
    calls = []

    def fake_run(*args, **kwargs):  # noqa: ANN001
        calls.append((args[0], kwargs))
        assert (Path(kwargs["cwd"]) / "main.go").exists()
        return subprocess.CompletedProcess(
            args=args[0], returncode=0, stdout=json.dumps(sample_scan).encode("utf-8"), stderr=b""
        )

    monkeypatch.setattr(subprocess, "run", fake_run)
    go_file = scan_file(path=_go_file(tmp_path))

    assert go_file.package == "main"
    assert go_file.find_interface("Sample").methods[0].name == "Do"
    cmd, _kwargs = calls[0]
    assert cmd[:3] == ["go", "run", "."]
    assert cmd[3] == "--file"
    assert Path(cmd[4]).name == "sample.go"


def test_scan_file_uses_go_override(monkeypatch, tmp_path: Path, sample_scan):
    from godeco.scan import scan_file

    seen = []

    def fake_run(*args, **kwargs):  # noqa: ANN001
        seen.append(args[0][0])
        return subprocess.CompletedProcess(args=args[0], returncode=0, stdout=json.dumps(sample_scan).encode(), stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.setenv("GODECO_GO", "/opt/go/bin/go")
    scan_file(path=_go_file(tmp_path))
    assert seen == ["/opt/go/bin/go"]


def test_scan_file_tolerates_non_utf8_prefix(monkeypatch, tmp_path: Path, sample_scan):
    from godeco.scan import scan_file

    payload = b"\x88\x00go: downloading toolchain\n" + json.dumps(sample_scan).encode("utf-8")

    def fake_run(*args, **kwargs):  # noqa: ANN001
        return subprocess.CompletedProcess(args=args[0], returncode=0, stdout=payload, stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    go_file = scan_file(path=_go_file(tmp_path))
    assert [i.name for i in go_file.interfaces] == ["Sample", "Other"]


def test_scan_failure_raises_parse_error(monkeypatch, tmp_path: Path):
    from godeco.errors import ParseError
    from godeco.scan import scan_file

    def fake_run(*args, **kwargs):  # noqa: ANN001
        return subprocess.CompletedProcess(
            args=args[0], returncode=1, stdout=b"", stderr=b"sample.go:3:1: expected 'package', found 'EOF'"
        )

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ParseError, match=r"expected 'package'"):
        scan_file(path=_go_file(tmp_path))


def test_scan_garbage_output_raises_scan_error(monkeypatch, tmp_path: Path):
    from godeco.errors import ScanError
    from godeco.scan import scan_file

    def fake_run(*args, **kwargs):  # noqa: ANN001
        return subprocess.CompletedProcess(args=args[0], returncode=0, stdout=b"not json", stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ScanError, match=r"failed to parse go scan output"):
        scan_file(path=_go_file(tmp_path))


def test_scan_missing_go_raises_scan_error(monkeypatch, tmp_path: Path):
    from godeco.errors import ScanError
    from godeco.scan import scan_file

    def fake_run(*args, **kwargs):  # noqa: ANN001
        raise FileNotFoundError("go")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ScanError, match=r"Go toolchain not found"):
        scan_file(path=_go_file(tmp_path))


def test_scan_missing_file_raises_parse_error(tmp_path: Path):
    from godeco.errors import ParseError
    from godeco.scan import scan_file

    with pytest.raises(ParseError, match=r"cannot read"):
        scan_file(path=tmp_path / "missing.go")


def test_scan_module_targets_go_1_18(monkeypatch, tmp_path: Path, sample_scan):
    from godeco.scan import scan_file

    go_mods = []

    def fake_run(*args, **kwargs):  # noqa: ANN001
        go_mods.append((Path(kwargs["cwd"]) / "go.mod").read_text(encoding="utf-8"))
        return subprocess.CompletedProcess(args=args[0], returncode=0, stdout=json.dumps(sample_scan).encode(), stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    scan_file(path=_go_file(tmp_path))
    assert go_mods[0].splitlines()[2] == "go 1.18"


def test_scanner_nests_array_length():
    from godeco.scan import _scanner_go_source

    src = _scanner_go_source()
    assert "exprs = append(exprs, t.Len)" in src


SCAN_CASES = [
    ("Map(map[io.Reader]*os.File)", ["io.Reader", "os.File"]),
    ("Func(func(context.Context, ...fmt.Stringer) (*big.Int, error))", ["context.Context", "fmt.Stringer", "big.Int", "error"]),
    ("Chan(<-chan []time.Duration)", ["time.Duration"]),
    ("Generic(atomic.Pointer[url.URL])", ["atomic.Pointer", "url.URL"]),
    ("Array([sha256.Size]byte)", ["byte", "sha256.Size"]),
    ("Struct(struct{ W io.Writer })", ["io.Writer"]),
]


@pytest.mark.skipif(
    os.environ.get("GODECO_INTEGRATION") != "1",
    reason="set GODECO_INTEGRATION=1 to run integration tests",
)
@pytest.mark.parametrize("method,leaves", SCAN_CASES)
def test_integration_scan_type_leaves(tmp_path: Path, method: str, leaves: list[str]):
    from godeco.resolve import select_types
    from godeco.scan import scan_file

    src = tmp_path / "leaves.go"
    src.write_text(f"package leaves\n\ntype Leaves interface {{\n\t{method}\n}}\n", encoding="utf-8")

    iface = scan_file(path=src).find_interface("Leaves")
    param = iface.methods[0].params[0]
    assert select_types(param) == leaves
