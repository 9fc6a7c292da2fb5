"""Tree-sitter parse and capture-query execution.

The engine owns one parser and one compiled query per LanguageSpec. Both are
built when the engine is constructed, so a broken grammar or query fails
before any file is visited. ``extract`` parses a byte buffer and yields the
text of every capture, matches in document order and captures in pattern
order within a match.

Parsing is error tolerant: malformed input still produces a tree with ERROR
regions, and complete subtrees inside it are matched as usual.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import structlog
import tree_sitter
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from identscan.config.models import DecodeErrorPolicy
from identscan.core.errors import GrammarError
from identscan.extraction.packs import LanguageSpec

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _Compiled:
    parser: tree_sitter.Parser
    query: _TSQuery


class QueryEngine:
    """Parses source bytes and runs a spec's capture query over the tree.

    Usage::

        engine = QueryEngine(registry.specs())
        for name in engine.extract(spec, path.read_bytes()):
            print(name)
    """

    def __init__(
        self,
        specs: Iterable[LanguageSpec] = (),
        decode_errors: DecodeErrorPolicy = "empty",
    ) -> None:
        if decode_errors not in ("empty", "skip"):
            raise ValueError(f"Unknown decode error policy: {decode_errors}")
        self._decode_errors = decode_errors
        self._compiled: dict[LanguageSpec, _Compiled] = {}
        for spec in specs:
            self._compile(spec)

    @property
    def decode_errors(self) -> DecodeErrorPolicy:
        return self._decode_errors

    def _compile(self, spec: LanguageSpec) -> _Compiled:
        compiled = self._compiled.get(spec)
        if compiled is not None:
            return compiled

        try:
            parser = tree_sitter.Parser(spec.grammar)
        except (TypeError, ValueError) as err:
            raise GrammarError.module_unavailable(spec.name, "tree_sitter.Parser", str(err)) from err

        try:
            query = _TSQuery(spec.grammar, spec.query_text)
        except (tree_sitter.QueryError, ValueError, TypeError) as err:
            raise GrammarError.query_invalid(spec.name, str(err)) from err

        compiled = _Compiled(parser=parser, query=query)
        self._compiled[spec] = compiled
        log.debug("query_compiled", language=spec.name, patterns=query.pattern_count)
        return compiled

    def extract(self, spec: LanguageSpec, source: bytes) -> Iterator[str]:
        """Yield the text of every capture of ``spec``'s query over ``source``.

        Undecodable captures become ``""`` (policy ``empty``) or are
        omitted (policy ``skip``).

        Raises:
            GrammarError: If ``spec`` was not pre-compiled and fails to compile.
        """
        compiled = self._compile(spec)
        tree = compiled.parser.parse(source)
        cursor = _TSQueryCursor(compiled.query)
        matches: list[tuple[int, dict[str, list[tree_sitter.Node]]]] = cursor.matches(
            tree.root_node
        )

        for _pattern_idx, captures in matches:
            for nodes in captures.values():
                for node in nodes:
                    text = self._node_text(source, node, spec)
                    if text is None:
                        continue
                    yield text

    def _node_text(
        self, source: bytes, node: tree_sitter.Node, spec: LanguageSpec
    ) -> str | None:
        raw = source[node.start_byte : node.end_byte]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            log.debug(
                "capture_undecodable",
                language=spec.name,
                start_byte=node.start_byte,
                end_byte=node.end_byte,
                policy=self._decode_errors,
            )
            if self._decode_errors == "skip":
                return None
            return ""
