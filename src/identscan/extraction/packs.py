"""Grammar packs and the extension registry.

Every supported language has exactly ONE GrammarPack describing where its
tree-sitter grammar lives and which capture query extracts identifiers from
it. ``build_registry()`` loads each grammar once and returns an immutable
``LanguageRegistry`` keyed by file extension.

C++ sources and headers share one pack; plain C shares a separate one.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import structlog
import tree_sitter

from identscan.core.errors import GrammarError

log = structlog.get_logger(__name__)

# =========================================================================
# Dataclasses
# =========================================================================


@dataclass(frozen=True)
class GrammarPack:
    """Static description of one supported language."""

    # -- Identity --
    name: str  # Canonical language name ("c", "cpp", "python", "rust")

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-python")
    grammar_module: str  # Python import ("tree_sitter_python")
    language_func: str = "language"

    # -- Extraction --
    query_text: str = ""

    # -- File detection (no leading dot, case-sensitive) --
    extensions: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, eq=False)
class LanguageSpec:
    """A loaded grammar paired with the capture query compiled against it.

    Specs compare and hash by identity: the engine caches one parser and
    query per spec, and two specs with equal names and queries may still
    carry different grammars.
    """

    name: str
    grammar: tree_sitter.Language = field(repr=False)
    query_text: str
    extensions: frozenset[str] = field(default_factory=frozenset)


# =========================================================================
# Packs
# =========================================================================

_IDENTIFIER_QUERY = "(identifier) @name"

C_PACK = GrammarPack(
    name="c",
    grammar_package="tree-sitter-c",
    grammar_module="tree_sitter_c",
    query_text=_IDENTIFIER_QUERY,
    extensions=frozenset({"c", "h"}),
)

# Qualified names (foo::bar) put the qualifier in a namespace_identifier node.
CPP_PACK = GrammarPack(
    name="cpp",
    grammar_package="tree-sitter-cpp",
    grammar_module="tree_sitter_cpp",
    query_text="(identifier) @name (namespace_identifier) @name",
    extensions=frozenset({"cc", "cpp", "cxx", "hh", "hpp", "hxx"}),
)

PYTHON_PACK = GrammarPack(
    name="python",
    grammar_package="tree-sitter-python",
    grammar_module="tree_sitter_python",
    query_text=_IDENTIFIER_QUERY,
    extensions=frozenset({"py"}),
)

RUST_PACK = GrammarPack(
    name="rust",
    grammar_package="tree-sitter-rust",
    grammar_module="tree_sitter_rust",
    query_text=_IDENTIFIER_QUERY,
    extensions=frozenset({"rs"}),
)

ALL_PACKS: tuple[GrammarPack, ...] = (C_PACK, CPP_PACK, PYTHON_PACK, RUST_PACK)


# =========================================================================
# Registry
# =========================================================================


class LanguageRegistry:
    """Read-only mapping from file extension to LanguageSpec.

    Built once before any traversal and never mutated afterwards.
    """

    __slots__ = ("_by_ext", "_specs")

    def __init__(self, specs: Iterable[LanguageSpec]) -> None:
        by_ext: dict[str, LanguageSpec] = {}
        ordered: list[LanguageSpec] = []
        for spec in specs:
            ordered.append(spec)
            for ext in sorted(spec.extensions):
                existing = by_ext.get(ext)
                if existing is not None:
                    raise GrammarError.duplicate_extension(ext, existing.name, spec.name)
                by_ext[ext] = spec
        self._by_ext = MappingProxyType(by_ext)
        self._specs = tuple(ordered)

    def lookup(self, extension: str | None) -> LanguageSpec | None:
        """Get the spec for an extension (without leading dot), or None."""
        if extension is None:
            return None
        return self._by_ext.get(extension)

    def lookup_path(self, path: Path) -> LanguageSpec | None:
        return self.lookup(extension_for(path))

    def specs(self) -> tuple[LanguageSpec, ...]:
        """Distinct specs in registration order."""
        return self._specs

    def extensions(self) -> frozenset[str]:
        return frozenset(self._by_ext)

    def __contains__(self, extension: object) -> bool:
        return extension in self._by_ext

    def __len__(self) -> int:
        return len(self._by_ext)


def extension_for(path: Path) -> str | None:
    """Final suffix of ``path`` without the dot, case preserved.

    Dotfiles such as ``.bashrc`` have no extension.
    """
    suffix = path.suffix
    if not suffix:
        return None
    return suffix[1:]


def load_grammar(pack: GrammarPack) -> tree_sitter.Language:
    """Import the pack's grammar module and wrap it as a tree-sitter Language."""
    try:
        mod = importlib.import_module(pack.grammar_module)
        lang_fn = getattr(mod, pack.language_func)
        return tree_sitter.Language(lang_fn())
    except (ImportError, AttributeError, TypeError, ValueError) as err:
        raise GrammarError.module_unavailable(
            pack.name, pack.grammar_module, str(err), package=pack.grammar_package
        ) from err


def load_spec(pack: GrammarPack) -> LanguageSpec:
    return LanguageSpec(
        name=pack.name,
        grammar=load_grammar(pack),
        query_text=pack.query_text,
        extensions=pack.extensions,
    )


def build_registry(packs: Iterable[GrammarPack] = ALL_PACKS) -> LanguageRegistry:
    """Load every pack's grammar and build the extension registry.

    Raises:
        GrammarError: If a grammar module is missing or two packs claim
            the same extension.
    """
    specs = [load_spec(pack) for pack in packs]
    registry = LanguageRegistry(specs)
    log.debug(
        "registry_built",
        languages=[spec.name for spec in specs],
        extensions=sorted(registry.extensions()),
    )
    return registry
