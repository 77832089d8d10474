"""Find exported runners and the schema declarations that describe them."""

from collections.abc import Sequence

from runner_directives.core.syntax import (
    ARROW_FUNCTION,
    DECLARATION_TYPES,
    IDENTIFIER_TYPES,
    SourceFile,
    declarators,
    has_async_modifier,
    is_async_arrow,
    is_exported,
    line_of,
    walk,
)
from runner_directives.models import RunnerDeclaration, SchemaDeclaration


def find_exported_runners(source_file: SourceFile) -> list[RunnerDeclaration]:
    """Exported async functions and exported variables bound to async arrows, in pre-order."""
    runners: list[RunnerDeclaration] = []
    for node in walk(source_file.root):
        if node.type == "function_declaration":
            if is_exported(node) and has_async_modifier(node):
                name = node.child_by_field_name("name")
                if name is not None:
                    runners.append(RunnerDeclaration(name=source_file.node_text(name), line=line_of(node)))
        elif node.type in DECLARATION_TYPES and is_exported(node):
            for declarator in declarators(node):
                value = declarator.child_by_field_name("value")
                if value is None or value.type != ARROW_FUNCTION or not is_async_arrow(value):
                    continue
                name = declarator.child_by_field_name("name")
                if name is not None and name.type in IDENTIFIER_TYPES:
                    runners.append(RunnerDeclaration(name=source_file.node_text(name), line=line_of(node)))
    return runners


def find_exported_schemas(source_file: SourceFile, runner_names: Sequence[str]) -> list[SchemaDeclaration]:
    """Exported variables whose name contains "schema", matched to the first runner named inside it.

    Both comparisons ignore case, so ``FetchDataSchema`` belongs to ``fetchData``.
    """
    schemas: list[SchemaDeclaration] = []
    for node in walk(source_file.root):
        if node.type not in DECLARATION_TYPES or not is_exported(node):
            continue
        for declarator in declarators(node):
            name_node = declarator.child_by_field_name("name")
            if name_node is None or name_node.type not in IDENTIFIER_TYPES:
                continue
            name = source_file.node_text(name_node)
            lowered = name.lower()
            if "schema" not in lowered:
                continue
            runner_name = next((runner for runner in runner_names if runner.lower() in lowered), None)
            schemas.append(SchemaDeclaration(name=name, runner_name=runner_name, line=line_of(node)))
    return schemas
