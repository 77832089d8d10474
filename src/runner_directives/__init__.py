from runner_directives.core.directives import DirectiveAnalysis, analyze_directives
from runner_directives.core.discovery import find_exported_runners, find_exported_schemas
from runner_directives.core.extract import MetadataWriteError, extract_metadata, run_extract, write_metadata
from runner_directives.core.strip import strip_directives, strip_statements
from runner_directives.core.syntax import ParseError, SourceFile, parse_source
from runner_directives.core.transform import transform_file, transform_source
from runner_directives.core.typo import near_match
from runner_directives.models import (
    USE_RUNNER,
    Diagnostic,
    DirectiveLocation,
    FileMetadata,
    RunnerDeclaration,
    RunnerErrorKind,
    SchemaDeclaration,
    Span,
    TransformResult,
)

__all__ = [
    "USE_RUNNER",
    "Diagnostic",
    "DirectiveAnalysis",
    "DirectiveLocation",
    "FileMetadata",
    "MetadataWriteError",
    "ParseError",
    "RunnerDeclaration",
    "RunnerErrorKind",
    "SchemaDeclaration",
    "SourceFile",
    "Span",
    "TransformResult",
    "analyze_directives",
    "extract_metadata",
    "find_exported_runners",
    "find_exported_schemas",
    "near_match",
    "parse_source",
    "run_extract",
    "strip_directives",
    "strip_statements",
    "transform_file",
    "transform_source",
    "write_metadata",
]
