from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path

from .errors import ParseError, ScanError
from .model import GoFile
from .paths import go_executable

logger = logging.getLogger(__name__)


def scan_file(*, path: Path, go: str | None = None) -> GoFile:
    """Parse a Go source file into the signature model.

    The parsing is done by Go's own `go/parser`: a small scanner program is
    written to a temporary module and run with `go run`, printing the file's
    package, imports and interfaces as JSON.
    """
    path = Path(path)
    if not path.is_file():
        raise ParseError(f"cannot read Go source file {path}")
    path = path.resolve()
    prog = go or go_executable()

    with tempfile.TemporaryDirectory(prefix="godeco-goscan-") as td:
        scan_dir = Path(td)
        (scan_dir / "go.mod").write_text(
            "\n".join(
                [
                    "module godeco.goscan",
                    "",
                    "go 1.18",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        (scan_dir / "main.go").write_text(_scanner_go_source(), encoding="utf-8")

        try:
            proc = subprocess.run(
                [prog, "run", ".", "--file", str(path)],
                cwd=str(scan_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError as e:
            raise ScanError(
                "Go toolchain not found (`go` is missing from PATH). "
                "Install Go or set GODECO_GO to the go binary."
            ) from e

    stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
    stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
    if proc.returncode != 0:
        raise ScanError(f"failed to parse {path}\n{stderr.strip() or stdout.strip()}")

    obj = _decode_scan_output(stdout)
    go_file = GoFile.from_scan(obj, path=str(path))
    logger.debug(
        "scanned %s: package %s, %d imports, %d interfaces",
        path,
        go_file.package,
        len(go_file.imports),
        len(go_file.interfaces),
    )
    return go_file


def _decode_scan_output(out: str) -> dict:
    # `go run` may print toolchain messages before the JSON object.
    start = out.find("{")
    if start == -1:
        raise ScanError(f"failed to parse go scan output\n{out}")
    try:
        obj, _end = json.JSONDecoder().raw_decode(out[start:])
    except ValueError as e:
        raise ScanError(f"failed to parse go scan output: {e}\n{out}") from e
    if not isinstance(obj, dict):
        raise ScanError("go scan output is not an object")
    return obj


def _scanner_go_source() -> str:
    # Keep this file stdlib-only so `go run` doesn't need network access.
    return r'''
package main

import (
	"encoding/json"
	"flag"
	"fmt"
	"go/ast"
	"go/parser"
	"go/token"
	"go/types"
	"os"
	"strconv"
)

type outType struct {
	Name  string    `json:"name,omitempty"`
	Type  string    `json:"type"`
	Inner []outType `json:"inner,omitempty"`
}

type outMethod struct {
	Name    string    `json:"name"`
	Params  []outType `json:"params"`
	Results []outType `json:"results"`
}

type outInterface struct {
	Name    string      `json:"name"`
	Embeds  []string    `json:"embeds"`
	Methods []outMethod `json:"methods"`
}

type outImport struct {
	Name string `json:"name,omitempty"`
	Path string `json:"path"`
}

type outObj struct {
	Package    string         `json:"package"`
	Imports    []outImport    `json:"imports"`
	Interfaces []outInterface `json:"interfaces"`
}

func main() {
	var file string
	flag.StringVar(&file, "file", "", "Go source file to scan")
	flag.Parse()

	if file == "" {
		fmt.Fprintln(os.Stderr, "missing --file")
		os.Exit(2)
	}

	fs := token.NewFileSet()
	af, err := parser.ParseFile(fs, file, nil, 0)
	if err != nil {
		fmt.Fprintln(os.Stderr, err.Error())
		os.Exit(1)
	}

	out := outObj{
		Package:    af.Name.Name,
		Imports:    []outImport{},
		Interfaces: []outInterface{},
	}
	for _, imp := range af.Imports {
		p, err := strconv.Unquote(imp.Path.Value)
		if err != nil {
			p = imp.Path.Value
		}
		oi := outImport{Path: p}
		if imp.Name != nil {
			oi.Name = imp.Name.Name
		}
		out.Imports = append(out.Imports, oi)
	}

	for _, decl := range af.Decls {
		gd, ok := decl.(*ast.GenDecl)
		if !ok || gd.Tok != token.TYPE {
			continue
		}
		for _, spec := range gd.Specs {
			ts, ok := spec.(*ast.TypeSpec)
			if !ok || ts.Name == nil {
				continue
			}
			it, ok := ts.Type.(*ast.InterfaceType)
			if !ok {
				continue
			}
			out.Interfaces = append(out.Interfaces, interfaceOf(ts.Name.Name, it))
		}
	}

	enc := json.NewEncoder(os.Stdout)
	enc.SetEscapeHTML(false)
	_ = enc.Encode(out)
}

func interfaceOf(name string, it *ast.InterfaceType) outInterface {
	oi := outInterface{Name: name, Embeds: []string{}, Methods: []outMethod{}}
	if it.Methods == nil {
		return oi
	}
	for _, f := range it.Methods.List {
		ft, ok := f.Type.(*ast.FuncType)
		if ok && len(f.Names) > 0 {
			for _, n := range f.Names {
				oi.Methods = append(oi.Methods, outMethod{
					Name:    n.Name,
					Params:  fieldList(ft.Params),
					Results: fieldList(ft.Results),
				})
			}
			continue
		}
		// Embedded interface or type-set term.
		oi.Embeds = append(oi.Embeds, types.ExprString(f.Type))
	}
	return oi
}

func fieldList(fl *ast.FieldList) []outType {
	out := []outType{}
	if fl == nil {
		return out
	}
	for _, f := range fl.List {
		if len(f.Names) == 0 {
			out = append(out, typeOf(f.Type, ""))
			continue
		}
		for _, n := range f.Names {
			out = append(out, typeOf(f.Type, n.Name))
		}
	}
	return out
}

func typeOf(e ast.Expr, name string) outType {
	return outType{Name: name, Type: types.ExprString(e), Inner: innerOf(e)}
}

func innerOf(e ast.Expr) []outType {
	var exprs []ast.Expr
	switch t := e.(type) {
	case *ast.StarExpr:
		exprs = []ast.Expr{t.X}
	case *ast.ParenExpr:
		exprs = []ast.Expr{t.X}
	case *ast.ArrayType:
		exprs = []ast.Expr{t.Elt}
		if _, ok := t.Len.(*ast.Ellipsis); t.Len != nil && !ok {
			// Array lengths may name constants from other packages.
			exprs = append(exprs, t.Len)
		}
	case *ast.Ellipsis:
		exprs = []ast.Expr{t.Elt}
	case *ast.ChanType:
		exprs = []ast.Expr{t.Value}
	case *ast.MapType:
		exprs = []ast.Expr{t.Key, t.Value}
	case *ast.IndexExpr:
		exprs = []ast.Expr{t.X, t.Index}
	case *ast.IndexListExpr:
		exprs = append([]ast.Expr{t.X}, t.Indices...)
	case *ast.FuncType:
		return append(fieldList(t.Params), fieldList(t.Results)...)
	case *ast.StructType:
		return fieldList(t.Fields)
	case *ast.InterfaceType:
		out := []outType{}
		if t.Methods != nil {
			for _, f := range t.Methods.List {
				out = append(out, typeOf(f.Type, ""))
			}
		}
		return out
	}
	out := []outType{}
	for _, x := range exprs {
		out = append(out, typeOf(x, ""))
	}
	return out
}
'''
