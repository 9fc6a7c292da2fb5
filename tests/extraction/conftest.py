"""Shared fixtures for extraction tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from identscan.extraction import (
    LanguageRegistry,
    QueryEngine,
    Traverser,
    build_registry,
)

RUST_ADD = "fn add(a: i32, b: i32) -> i32 { a + b }\n"

PYTHON_GREET = "def greet(name):\n    return name.upper()\n"

C_MAIN = "int main(void) {\n    int count = 0;\n    return count;\n}\n"

CPP_QUALIFIED = "void run() {\n    foo::bar();\n}\n"

# A string literal whose only content byte is not valid UTF-8.
RUST_RAW_BYTES = b'fn f() { let s = "\xff"; }\n'

RUST_STRING_QUERY = "(identifier) @name (string_content) @name"


@pytest.fixture(scope="session")
def registry() -> LanguageRegistry:
    """Registry with every bundled grammar loaded."""
    return build_registry()


@pytest.fixture(scope="session")
def engine(registry: LanguageRegistry) -> QueryEngine:
    return QueryEngine(registry.specs())


class Collector:
    """Records emitted identifiers and diagnostics."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.diagnostics: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def report(self, line: str) -> None:
        self.diagnostics.append(line)


@pytest.fixture
def collector() -> Collector:
    return Collector()


@pytest.fixture
def traverser(registry: LanguageRegistry, engine: QueryEngine, collector: Collector) -> Traverser:
    return Traverser(
        registry,
        engine,
        emit=collector.emit,
        report=collector.report,
        program_name="identscan",
    )


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small nested tree mixing supported and unsupported files."""
    root = tmp_path / "tree"
    (root / "src" / "deep" / "deeper").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "src" / "lib.rs").write_text(RUST_ADD)
    (root / "src" / "deep" / "greet.py").write_text(PYTHON_GREET)
    (root / "src" / "deep" / "deeper" / "main.c").write_text(C_MAIN)
    (root / "docs" / "README.md").write_text("# add greet main\n")
    (root / "notes.txt").write_text("count name\n")
    return root
