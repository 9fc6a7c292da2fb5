"""Identifier extraction: grammar registry, query engine, traversal, driver."""

from identscan.extraction.driver import Driver, InputMode, Invocation, resolve_mode
from identscan.extraction.engine import QueryEngine
from identscan.extraction.packs import (
    ALL_PACKS,
    GrammarPack,
    LanguageRegistry,
    LanguageSpec,
    build_registry,
    extension_for,
)
from identscan.extraction.traverser import FileOutcome, ScanStats, Traverser

__all__ = [
    "ALL_PACKS",
    "Driver",
    "FileOutcome",
    "GrammarPack",
    "InputMode",
    "Invocation",
    "LanguageRegistry",
    "LanguageSpec",
    "QueryEngine",
    "ScanStats",
    "Traverser",
    "build_registry",
    "extension_for",
    "resolve_mode",
]
