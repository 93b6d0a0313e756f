# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering output parsers for every supported checker."""

import json
from pathlib import Path

import pytest

from polycheck.parsers import (
    parse_elixir,
    parse_gcc,
    parse_go_vet,
    parse_javac,
    parse_luac,
    parse_php_lint,
    parse_pyright,
    parse_rustc,
    parse_scalac,
    parse_terraform_fmt,
    parse_tsc,
    parse_zig,
)
from polycheck.parsers.base import load_json, same_file, to_position
from polycheck.parsers.ops import TERRAFORM_FORMAT_MESSAGE
from polycheck.severity import Severity


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path


def test_parse_tsc_keeps_continuations_and_filters_other_files(root: Path) -> None:
    stdout = "\n".join(
        [
            "src/app.ts(3,7): error TS2322: Type 'string' is not assignable to type 'number'.",
            "src/other.ts(1,1): error TS1005: ';' expected.",
            "src/app.ts(10,1): error TS2345: Argument of type 'X' is not assignable to parameter of type 'Y'.",
            "  Property 'a' is missing in type 'X' but required in type 'Y'.",
            "src/app.ts(12,3): message TS6133: 'unused' is declared but its value is never read.",
        ]
    )

    diagnostics = parse_tsc(stdout, "", root / "src" / "app.ts", root)

    assert [(d.line, d.column, d.code) for d in diagnostics] == [(3, 7, "TS2322"), (10, 1, "TS2345"), (12, 3, "TS6133")]
    assert diagnostics[1].message == (
        "Argument of type 'X' is not assignable to parameter of type 'Y'.\n"
        "Property 'a' is missing in type 'X' but required in type 'Y'."
    )
    assert diagnostics[2].severity is Severity.INFO


def test_parse_pyright_shifts_to_one_based(root: Path) -> None:
    target = root / "pkg" / "mod.py"
    payload = {
        "generalDiagnostics": [
            {
                "file": str(target),
                "severity": "error",
                "message": 'Import "missing" could not be resolved',
                "range": {"start": {"line": 0, "character": 0}, "end": {"line": 0, "character": 5}},
                "rule": "reportMissingImports",
            },
            {
                "file": str(target),
                "severity": "information",
                "message": "note",
                "range": {"start": {"line": 4, "character": 2}},
            },
            {
                "file": str(root / "pkg" / "other.py"),
                "severity": "error",
                "message": "elsewhere",
                "range": {"start": {"line": 1, "character": 1}},
            },
        ]
    }

    diagnostics = parse_pyright(json.dumps(payload), "", target, root)

    assert len(diagnostics) == 2
    first, second = diagnostics
    assert (first.line, first.column, first.code, first.severity) == (1, 1, "reportMissingImports", Severity.ERROR)
    assert (second.line, second.column, second.severity) == (5, 3, Severity.INFO)


def test_parse_pyright_tolerates_garbage(root: Path) -> None:
    assert parse_pyright("No configuration file found.\n", "", root / "a.py", root) == []


def test_parse_gcc_maps_note_to_info(root: Path) -> None:
    stderr = "\n".join(
        [
            "main.c: In function 'main':",
            "main.c:3:5: error: unknown type name 'foo'",
            "main.c:4:9: warning: unused variable 'x' [-Wunused-variable]",
            "main.c:2:1: note: declared here",
            "main.c:1:10: fatal error: missing.h: No such file or directory",
        ]
    )

    diagnostics = parse_gcc("", stderr, root / "main.c", root)

    assert [(d.line, d.column, d.severity) for d in diagnostics] == [
        (3, 5, Severity.ERROR),
        (4, 9, Severity.WARNING),
        (2, 1, Severity.INFO),
        (1, 10, Severity.ERROR),
    ]
    assert diagnostics[1].message == "unused variable 'x' [-Wunused-variable]"


def test_parse_rustc_short_format(root: Path) -> None:
    stderr = "\n".join(
        [
            "src/lib.rs:2:5: error[E0425]: cannot find value `y` in this scope",
            "src/lib.rs:1:4: warning: function `f` is never used",
            "error: aborting due to 1 previous error",
        ]
    )

    diagnostics = parse_rustc("", stderr, root / "src" / "lib.rs", root)

    assert len(diagnostics) == 2
    assert diagnostics[0].code == "E0425"
    assert diagnostics[0].message == "cannot find value `y` in this scope"
    assert diagnostics[1].severity is Severity.WARNING


def test_parse_go_vet(root: Path) -> None:
    stderr = "\n".join(
        [
            "# example.com/m",
            "./main.go:5:2: fmt.Printf format %d has arg s of wrong type string",
            "vet: ./main.go:8: undefined: foo",
        ]
    )

    diagnostics = parse_go_vet("", stderr, root / "main.go", root)

    assert [(d.line, d.column) for d in diagnostics] == [(5, 2), (8, 1)]
    assert all(d.severity is Severity.ERROR for d in diagnostics)
    assert diagnostics[1].message == "undefined: foo"


def test_parse_zig(root: Path) -> None:
    stderr = "main.zig:3:5: error: expected ';' after statement\n    foo()\n    ^\n"

    (diagnostic,) = parse_zig("", stderr, root / "main.zig", root)

    assert (diagnostic.line, diagnostic.column) == (3, 5)
    assert diagnostic.message == "expected ';' after statement"


def test_parse_javac_uses_caret_column_and_lint_code(root: Path) -> None:
    stderr = "\n".join(
        [
            "Main.java:5: error: ';' expected",
            "        int x = 1",
            "                 ^",
            "Main.java:7: warning: [rawtypes] found raw type: List",
            "        List l = null;",
            "        ^",
            "1 error",
            "1 warning",
        ]
    )

    diagnostics = parse_javac("", stderr, root / "Main.java", root)

    assert [(d.line, d.column, d.severity) for d in diagnostics] == [
        (5, 18, Severity.ERROR),
        (7, 9, Severity.WARNING),
    ]
    assert diagnostics[1].code == "rawtypes"
    assert diagnostics[1].message == "found raw type: List"


def test_parse_scalac_scala2(root: Path) -> None:
    stderr = "\n".join(
        [
            "Foo.scala:3: error: type mismatch;",
            ' found   : String("x")',
            " required: Int",
            '  val x: Int = "x"',
            "               ^",
            "one error found",
        ]
    )

    (diagnostic,) = parse_scalac("", stderr, root / "Foo.scala", root)

    assert (diagnostic.line, diagnostic.column) == (3, 16)
    assert diagnostic.message.startswith("type mismatch;")
    assert "required: Int" in diagnostic.message
    assert 'val x' not in diagnostic.message


def test_parse_scalac_scala3(root: Path) -> None:
    stdout = "\n".join(
        [
            "-- [E007] Type Mismatch Error: src/Foo.scala:3:15 -----------------------------",
            '3 |  val x: Int = "x"',
            "  |               ^^^",
            '  |               Found:    ("x" : String)',
            "  |               Required: Int",
            "  |",
            "  | longer explanation available when compiling with `-explain`",
            "1 error found",
        ]
    )

    (diagnostic,) = parse_scalac(stdout, "", root / "src" / "Foo.scala", root)

    assert (diagnostic.line, diagnostic.column, diagnostic.code) == (3, 15, "E007")
    assert diagnostic.message.startswith("Type Mismatch: Found:")
    assert diagnostic.message.endswith("Required: Int")
    assert "longer explanation" not in diagnostic.message


def test_parse_php_lint_deduplicates_streams(root: Path) -> None:
    stderr = "PHP Parse error:  syntax error, unexpected end of file in /tmp/x.php on line 4\n"
    stdout = (
        "Parse error: syntax error, unexpected end of file in /tmp/x.php on line 4\n"
        "Errors parsing /tmp/x.php\n"
    )

    (diagnostic,) = parse_php_lint(stdout, stderr, root / "x.php", root)

    assert (diagnostic.line, diagnostic.column, diagnostic.severity) == (4, 1, Severity.ERROR)
    assert diagnostic.message == "syntax error, unexpected end of file"


def test_parse_php_lint_deprecations_are_warnings(root: Path) -> None:
    stdout = "Deprecated: Optional parameter $a declared before required parameter in x.php on line 2\n"

    (diagnostic,) = parse_php_lint(stdout, "", root / "x.php", root)

    assert diagnostic.severity is Severity.WARNING


@pytest.mark.parametrize("prefix", ["luac: ", "luac5.4: ", "/usr/bin/luac: ", ""])
def test_parse_luac(prefix: str, root: Path) -> None:
    stderr = f"{prefix}main.lua:3: '=' expected near 'x'\n"

    (diagnostic,) = parse_luac("", stderr, root / "main.lua", root)

    assert diagnostic.line == 3
    assert diagnostic.message == "'=' expected near 'x'"


def test_parse_elixir_inline_format(root: Path) -> None:
    stderr = "** (SyntaxError) lib/foo.ex:3:5: syntax error before: ')'\n    (elixir) lib/code.ex:1: Code.string_to_quoted!/2\n"

    (diagnostic,) = parse_elixir("", stderr, root / "lib" / "foo.ex", root)

    assert (diagnostic.line, diagnostic.column, diagnostic.code) == (3, 5, "SyntaxError")
    assert diagnostic.message == "syntax error before: ')'"


def test_parse_elixir_header_format(root: Path) -> None:
    stderr = "\n".join(
        [
            "** (TokenMissingError) token missing on lib/foo.ex:4:1:",
            "    error: missing terminator: end",
            "    │",
            "  1 │ defmodule Foo do",
        ]
    )

    (diagnostic,) = parse_elixir("", stderr, root / "lib" / "foo.ex", root)

    assert (diagnostic.line, diagnostic.column, diagnostic.code) == (4, 1, "TokenMissingError")
    assert diagnostic.message == "missing terminator: end"


def test_parse_terraform_fmt_hunks_and_errors(root: Path) -> None:
    stdout = "\n".join(
        [
            "main.tf",
            "--- old/main.tf",
            "+++ new/main.tf",
            "@@ -3,7 +3,7 @@",
            ' resource "null_resource" "a" {',
            "   triggers = {",
            '-    x="1"',
            '+    x = "1"',
            "   }",
        ]
    )
    stderr = "\n".join(
        [
            "╷",
            "│ Error: Argument or block definition required",
            "│ ",
            "│   on main.tf line 9:",
            "│    9: foo",
            "╵",
        ]
    )

    diagnostics = parse_terraform_fmt(stdout, stderr, root / "main.tf", root)

    assert [(d.line, d.severity, d.code) for d in diagnostics] == [
        (5, Severity.WARNING, "fmt"),
        (9, Severity.ERROR, None),
    ]
    assert diagnostics[0].message == TERRAFORM_FORMAT_MESSAGE
    assert diagnostics[1].message == "Argument or block definition required"


def test_empty_output_parses_to_nothing(root: Path) -> None:
    for parser in (parse_gcc, parse_rustc, parse_go_vet, parse_javac, parse_scalac, parse_luac, parse_elixir):
        assert parser("", "", root / "file", root) == []


def test_helpers() -> None:
    assert to_position("7") == 7
    assert to_position(None) == 1
    assert to_position(0, offset=1) == 1
    assert to_position(True) == 1
    assert load_json('warning: noise\n{"a": 1}') == {"a": 1}
    assert load_json("not json") is None


def test_same_file_resolves_relative_paths(tmp_path: Path) -> None:
    target = tmp_path / "src" / "a.ts"

    assert same_file("src/a.ts", target, tmp_path)
    assert same_file(None, target, tmp_path)
    assert not same_file("src/b.ts", target, tmp_path)
