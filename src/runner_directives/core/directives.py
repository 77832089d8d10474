"""Locate and validate ``"use runner"`` directives.

Every scope that can host a leading directive is visited: the module root
and the block body of each function, method and arrow function, however
deeply nested.  Each scope is analysed on its own and the results are
collected into a :class:`DirectiveAnalysis`; nothing is reported through
global state.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from tree_sitter import Node

from runner_directives.core.syntax import (
    ARROW_FUNCTION,
    FUNCTION_TYPES,
    SourceFile,
    has_async_modifier,
    statements,
    string_literal_statement,
)
from runner_directives.core.typo import near_match
from runner_directives.models import USE_RUNNER, Diagnostic, DirectiveLocation, Span


@dataclass(frozen=True)
class Scope:
    location: DirectiveLocation
    container: Node
    owner: Node | None = None


@dataclass(frozen=True)
class DirectiveStatement:
    text: str
    index: int
    span: Span


@dataclass
class ScopeAnalysis:
    scope: Scope
    recognized: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)
    flagged: list[DirectiveStatement] = field(default_factory=list)


@dataclass
class DirectiveAnalysis:
    scopes: list[ScopeAnalysis] = field(default_factory=list)
    has_module_directive: bool = False
    directive_functions: list[str] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [diagnostic for scope in self.scopes for diagnostic in scope.diagnostics]

    @property
    def flagged(self) -> list[DirectiveStatement]:
        return [statement for scope in self.scopes for statement in scope.flagged]


def span_of(node: Node) -> Span:
    return Span(
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1],
    )


def iter_scopes(root: Node) -> Iterator[Scope]:
    """Yield the module scope followed by every function body scope in pre-order."""
    yield Scope(DirectiveLocation.MODULE, root)
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if node.type in FUNCTION_TYPES or node.type == ARROW_FUNCTION:
            body = node.child_by_field_name("body")
            if body is not None and body.type == "statement_block":
                yield Scope(DirectiveLocation.FUNCTION_BODY, body, owner=node)
        stack.extend(reversed(node.children))


def analyze_scope(scope: Scope, source: bytes) -> ScopeAnalysis:
    result = ScopeAnalysis(scope)
    for index, statement in enumerate(statements(scope.container)):
        text = string_literal_statement(statement, source)
        if text is None:
            continue

        directive = DirectiveStatement(text=text, index=index, span=span_of(statement))
        if text == USE_RUNNER:
            result.flagged.append(directive)
            if scope.location is DirectiveLocation.MODULE:
                result.recognized = True
                if index > 0:
                    result.diagnostics.append(Diagnostic.misplaced_directive(directive.span, scope.location))
            elif index == 0:
                result.recognized = True
                # Arrow functions are not checked for async-ness.
                owner = scope.owner
                if owner is not None and owner.type in FUNCTION_TYPES and not has_async_modifier(owner):
                    result.diagnostics.append(Diagnostic.non_async_function(directive.span))
            else:
                result.diagnostics.append(Diagnostic.misplaced_directive(directive.span, scope.location))
        elif near_match(text, USE_RUNNER):
            result.flagged.append(directive)
            result.diagnostics.append(Diagnostic.misspelled_directive(directive.span, text))
    return result


def analyze_directives(source_file: SourceFile) -> DirectiveAnalysis:
    analysis = DirectiveAnalysis()
    for scope in iter_scopes(source_file.root):
        scope_result = analyze_scope(scope, source_file.source)
        analysis.scopes.append(scope_result)
        if not scope_result.recognized:
            continue
        if scope.location is DirectiveLocation.MODULE:
            analysis.has_module_directive = True
        else:
            analysis.directive_functions.append(_owner_name(scope.owner, source_file))
    return analysis


def _owner_name(owner: Node | None, source_file: SourceFile) -> str:
    if owner is None:
        return "<module>"
    name = owner.child_by_field_name("name")
    if name is None and owner.parent is not None and owner.parent.type == "variable_declarator":
        name = owner.parent.child_by_field_name("name")
    return source_file.node_text(name) if name is not None else "<anonymous>"
