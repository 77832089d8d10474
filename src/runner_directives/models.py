from enum import Enum

from pydantic import BaseModel

USE_RUNNER = "use runner"


class DirectiveLocation(str, Enum):
    MODULE = "Module"
    FUNCTION_BODY = "FunctionBody"


class RunnerErrorKind(str, Enum):
    NON_ASYNC_FUNCTION = "NonAsyncFunction"
    MISPLACED_DIRECTIVE = "MisplacedDirective"
    MISSPELLED_DIRECTIVE = "MisspelledDirective"


class Span(BaseModel):
    start_byte: int
    end_byte: int
    start_line: int
    start_column: int


class Diagnostic(BaseModel):
    kind: RunnerErrorKind
    span: Span
    message: str
    location: DirectiveLocation | None = None
    directive: str | None = None

    @classmethod
    def non_async_function(cls, span: Span) -> "Diagnostic":
        return cls(
            kind=RunnerErrorKind.NON_ASYNC_FUNCTION,
            span=span,
            message=f'Functions marked with "{USE_RUNNER}" must be async functions',
        )

    @classmethod
    def misplaced_directive(cls, span: Span, location: DirectiveLocation) -> "Diagnostic":
        where = "file" if location is DirectiveLocation.MODULE else "function body"
        return cls(
            kind=RunnerErrorKind.MISPLACED_DIRECTIVE,
            span=span,
            message=f'The "{USE_RUNNER}" directive must be at the top of the {where}',
            location=location,
        )

    @classmethod
    def misspelled_directive(cls, span: Span, directive: str) -> "Diagnostic":
        return cls(
            kind=RunnerErrorKind.MISSPELLED_DIRECTIVE,
            span=span,
            message=f'"{directive}" looks like a typo. Did you mean "{USE_RUNNER}"?',
            directive=directive,
        )


class RunnerDeclaration(BaseModel):
    name: str
    line: int


class SchemaDeclaration(BaseModel):
    name: str
    runner_name: str | None = None
    line: int


class FileMetadata(BaseModel):
    file: str
    runners: list[RunnerDeclaration]
    schemas: list[SchemaDeclaration]


class TransformResult(BaseModel):
    file: str
    code: str
    diagnostics: list[Diagnostic]
    has_module_directive: bool = False
    directive_functions: list[str] = []
