# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in language backends: extensions, tool discovery, invocation and parser."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..parsers import (
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
from ..registry import BuildContext, DetectConfig, LanguageConfig

_C_SUFFIXES: Final[frozenset[str]] = frozenset({".c", ".h"})
_RUST_LIBRARY_NAMES: Final[frozenset[str]] = frozenset({"lib.rs", "mod.rs"})
_ELIXIR_QUOTE_SNIPPET: Final[str] = (
    "[path] = System.argv(); path |> File.read!() |> Code.string_to_quoted!(file: path)"
)


def markers_present(*names: str) -> DetectConfig:
    """Return a detector reporting whether any of *names* exists in the project root."""

    def _detect(project_root: Path) -> bool:
        return any((project_root / name).exists() for name in names)

    return _detect


def _tsc_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del tool
    args = ["--noEmit", "--pretty", "false"]
    if context.has_project_config:
        return [*args, "--project", str(project_root / "tsconfig.json")]
    args.extend(["--skipLibCheck", "--target", "es2022"])
    if file.suffix.lower() == ".tsx":
        args.extend(["--jsx", "preserve"])
    return [*args, str(file)]


def _pyright_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del tool
    args = ["--outputjson"]
    if context.has_project_config:
        args.extend(["--project", str(project_root)])
    return [*args, str(file)]


def _go_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["vet", str(file)]


def _rustc_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool
    args = ["--error-format=short", "--emit=metadata", "--edition=2021", "--out-dir", str(context.scratch_dir)]
    if file.name in _RUST_LIBRARY_NAMES:
        args.append("--crate-type=lib")
    return [*args, str(file)]


def _javac_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool
    return ["-Xlint:all", "-d", str(context.scratch_dir), str(file)]


def _gcc_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    args = ["-fsyntax-only", "-fdiagnostics-color=never", "-Wall"]
    if file.suffix.lower() in _C_SUFFIXES:
        args.extend(["-x", "c"])
    else:
        args.extend(["-x", "c++", "-std=c++17"])
    return [*args, str(file)]


def _php_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["-l", "-d", "display_errors=stderr", "-d", "log_errors=0", str(file)]


def _scalac_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool
    return ["-d", str(context.scratch_dir), str(file)]


def _luac_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["-p", str(file)]


def _elixir_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["-e", _ELIXIR_QUOTE_SNIPPET, str(file)]


def _terraform_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["fmt", "-check", "-diff", "-no-color", str(file)]


def _zig_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool, context
    return ["ast-check", str(file)]


TYPESCRIPT: Final[LanguageConfig] = LanguageConfig(
    name="TypeScript",
    code="typescript",
    flag="TypeScript",
    tool="tsc",
    extensions=(".ts", ".tsx", ".mts", ".cts"),
    local_paths=("node_modules/.bin/tsc",),
    detect_config=markers_present("tsconfig.json"),
    build_args=_tsc_args,
    parse_output=parse_tsc,
    install_hint="npm install -g typescript",
)

PYTHON: Final[LanguageConfig] = LanguageConfig(
    name="Python",
    code="python",
    flag="Python",
    tool="pyright",
    extensions=(".py", ".pyw"),
    local_paths=("node_modules/.bin/pyright", ".venv/bin/pyright", "venv/bin/pyright"),
    detect_config=markers_present("pyrightconfig.json", "pyproject.toml"),
    build_args=_pyright_args,
    parse_output=parse_pyright,
    install_hint="npm install -g pyright",
)

GO: Final[LanguageConfig] = LanguageConfig(
    name="Go",
    code="go",
    flag="Go",
    tool="go",
    extensions=(".go",),
    detect_config=markers_present("go.mod"),
    build_args=_go_args,
    parse_output=parse_go_vet,
    version_args=("version",),
    install_hint="Install Go from https://golang.org",
)

RUST: Final[LanguageConfig] = LanguageConfig(
    name="Rust",
    code="rust",
    flag="Rust",
    tool="rustc",
    extensions=(".rs",),
    detect_config=markers_present("Cargo.toml"),
    build_args=_rustc_args,
    parse_output=parse_rustc,
    install_hint="Install Rust from https://rustup.rs",
)

JAVA: Final[LanguageConfig] = LanguageConfig(
    name="Java",
    code="java",
    flag="Java",
    tool="javac",
    extensions=(".java",),
    detect_config=markers_present("pom.xml", "build.gradle", "build.gradle.kts"),
    build_args=_javac_args,
    parse_output=parse_javac,
    version_args=("-version",),
    install_hint="Install Java JDK",
)

CPP: Final[LanguageConfig] = LanguageConfig(
    name="C/C++",
    code="cpp",
    flag="Cpp",
    tool="gcc",
    extensions=(".c", ".h", ".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h++"),
    detect_config=markers_present("CMakeLists.txt", "compile_commands.json", "Makefile"),
    build_args=_gcc_args,
    parse_output=parse_gcc,
    install_hint="Install GCC or Clang",
)

PHP: Final[LanguageConfig] = LanguageConfig(
    name="PHP",
    code="php",
    flag="Php",
    tool="php",
    extensions=(".php",),
    local_paths=("vendor/bin/php",),
    detect_config=markers_present("composer.json"),
    build_args=_php_args,
    parse_output=parse_php_lint,
    install_hint="Install PHP",
)

SCALA: Final[LanguageConfig] = LanguageConfig(
    name="Scala",
    code="scala",
    flag="Scala",
    tool="scalac",
    extensions=(".scala", ".sc"),
    detect_config=markers_present("build.sbt", "build.sc"),
    build_args=_scalac_args,
    parse_output=parse_scalac,
    version_args=("-version",),
    install_hint="Install Scala",
)

LUA: Final[LanguageConfig] = LanguageConfig(
    name="Lua",
    code="lua",
    flag="Lua",
    tool="luac",
    extensions=(".lua",),
    detect_config=markers_present(".luacheckrc"),
    build_args=_luac_args,
    parse_output=parse_luac,
    version_args=("-v",),
    install_hint="Install Lua",
)

ELIXIR: Final[LanguageConfig] = LanguageConfig(
    name="Elixir",
    code="elixir",
    flag="Elixir",
    tool="elixir",
    extensions=(".ex", ".exs"),
    detect_config=markers_present("mix.exs"),
    build_args=_elixir_args,
    parse_output=parse_elixir,
    install_hint="Install Elixir",
)

TERRAFORM: Final[LanguageConfig] = LanguageConfig(
    name="Terraform",
    code="terraform",
    flag="Terraform",
    tool="terraform",
    extensions=(".tf", ".tfvars"),
    detect_config=markers_present(".terraform", ".terraform.lock.hcl"),
    build_args=_terraform_args,
    parse_output=parse_terraform_fmt,
    version_args=("version",),
    install_hint="Install Terraform",
)

ZIG: Final[LanguageConfig] = LanguageConfig(
    name="Zig",
    code="zig",
    flag="Zig",
    tool="zig",
    extensions=(".zig",),
    detect_config=markers_present("build.zig"),
    build_args=_zig_args,
    parse_output=parse_zig,
    version_args=("version",),
    install_hint="Install Zig from https://ziglang.org",
)

BUILTIN_LANGUAGES: Final[tuple[LanguageConfig, ...]] = (
    TYPESCRIPT,
    PYTHON,
    GO,
    RUST,
    JAVA,
    CPP,
    PHP,
    SCALA,
    LUA,
    ELIXIR,
    TERRAFORM,
    ZIG,
)


__all__ = [
    "BUILTIN_LANGUAGES",
    "CPP",
    "ELIXIR",
    "GO",
    "JAVA",
    "LUA",
    "PHP",
    "PYTHON",
    "RUST",
    "SCALA",
    "TERRAFORM",
    "TYPESCRIPT",
    "ZIG",
    "markers_present",
]
