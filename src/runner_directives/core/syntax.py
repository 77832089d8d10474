"""Tree-sitter backed syntax trees for TypeScript and JavaScript sources.

A :class:`SourceFile` owns the raw source bytes together with the parsed
tree.  The transform path mutates it in place through
:meth:`SourceFile.remove_ranges`, which edits the buffer, records the edit on
the tree and re-parses incrementally.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import cast

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from runner_directives.core.languages import normalize_language

FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "method_definition",
    }
)
ARROW_FUNCTION = "arrow_function"
DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
IDENTIFIER_TYPES = frozenset({"identifier", "property_identifier"})
EXPORT_STATEMENT = "export_statement"
ASYNC_MODIFIER = "async"

_NON_STATEMENT_TYPES = frozenset({"comment", "hash_bang_line"})


class ParseError(ValueError):
    """Raised when source text cannot be turned into a usable syntax tree."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class SourceFile:
    """Source bytes plus the tree-sitter tree parsed from them."""

    def __init__(self, source: bytes, language: str, path: str | None = None) -> None:
        self.path = path
        self.language = language
        self.source = source
        self._parser: Parser = get_parser(cast(SupportedLanguage, language))
        self.tree: Tree = self._parser.parse(source)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def text(self) -> str:
        return self.source.decode("utf-8")

    def node_text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def remove_ranges(self, ranges: Iterable[tuple[int, int]]) -> None:
        """Delete the given byte ranges and re-parse the tree incrementally.

        Ranges must not overlap.
        """
        ordered = sorted(ranges, reverse=True)
        if not ordered:
            return
        source = self.source
        for start, end in ordered:
            start_point = _point_at(source, start)
            self.tree.edit(
                start_byte=start,
                old_end_byte=end,
                new_end_byte=start,
                start_point=start_point,
                old_end_point=_point_at(source, end),
                new_end_point=start_point,
            )
            source = source[:start] + source[end:]
        self.source = source
        self.tree = self._parser.parse(source, self.tree)


def parse_source(
    source: str | bytes,
    language: str,
    path: str | None = None,
    allow_errors: bool = False,
) -> SourceFile:
    """Parse *source* with the grammar for *language*.

    Tree-sitter recovers from syntax errors; unless *allow_errors* is set, a
    tree containing error nodes is rejected with :class:`ParseError`.
    """
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    source_file = SourceFile(source_bytes, normalize_language(language), path)
    if source_file.root.has_error and not allow_errors:
        raise ParseError("source contains syntax errors", path)
    return source_file


def _point_at(source: bytes, offset: int) -> tuple[int, int]:
    row = source.count(b"\n", 0, offset)
    line_start = source.rfind(b"\n", 0, offset) + 1
    return row, offset - line_start


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all of its descendants in pre-order."""
    cursor = node.walk()
    visited_children = False
    while True:
        if not visited_children:
            current = cursor.node
            assert current is not None
            yield current
            if not cursor.goto_first_child():
                visited_children = True
        elif cursor.goto_next_sibling():
            visited_children = False
        elif not cursor.goto_parent():
            break


def line_of(node: Node) -> int:
    """1-based line number of the node's first byte."""
    return node.start_point[0] + 1


def is_exported(node: Node) -> bool:
    current: Node | None = node
    while current is not None:
        if current.type == EXPORT_STATEMENT:
            return True
        current = current.parent
    return False


def has_async_modifier(node: Node) -> bool:
    return any(child.type == ASYNC_MODIFIER for child in node.children)


def is_async_arrow(arrow: Node) -> bool:
    """Arrow functions carry ``async`` themselves; fall back to the parent node."""
    if has_async_modifier(arrow):
        return True
    parent = arrow.parent
    return parent is not None and has_async_modifier(parent)


def declarators(declaration: Node) -> list[Node]:
    return [child for child in declaration.named_children if child.type == "variable_declarator"]


def statements(container: Node) -> list[Node]:
    """Statements of a ``program`` or ``statement_block`` in source order."""
    return [child for child in container.named_children if child.type not in _NON_STATEMENT_TYPES]


def string_literal_statement(statement: Node, source: bytes) -> str | None:
    """Return the raw literal text when *statement* is a bare string expression."""
    if statement.type != "expression_statement":
        return None
    expressions = [child for child in statement.named_children if child.type != "comment"]
    if len(expressions) != 1 or expressions[0].type != "string":
        return None
    literal = expressions[0]
    return source[literal.start_byte + 1 : literal.end_byte - 1].decode("utf-8")
