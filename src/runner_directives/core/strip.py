from collections.abc import Collection, Sequence
from typing import TypeVar

from runner_directives.core.directives import DirectiveAnalysis, analyze_directives
from runner_directives.core.syntax import SourceFile

T = TypeVar("T")


def strip_statements(statements: Sequence[T], flagged: Collection[int]) -> list[T]:
    """Drop the statements at the *flagged* indices, keeping the rest in order."""
    return [statement for index, statement in enumerate(statements) if index not in flagged]


def removal_range(source: bytes, start: int, end: int) -> tuple[int, int]:
    """Widen a statement's byte range to its whole line when nothing else shares it."""
    line_start = source.rfind(b"\n", 0, start) + 1
    line_end = source.find(b"\n", end)
    if line_end == -1:
        line_end = len(source)
    if source[line_start:start].strip() or source[end:line_end].strip():
        return start, end
    return line_start, min(line_end + 1, len(source))


def strip_directives(source_file: SourceFile, analysis: DirectiveAnalysis | None = None) -> int:
    """Remove recognised, misplaced and misspelled directives from *source_file*.

    *analysis* must have been computed on the current tree; when omitted the
    file is analysed first.  Returns the number of statements removed.
    """
    if analysis is None:
        analysis = analyze_directives(source_file)
    ranges = [
        removal_range(source_file.source, statement.span.start_byte, statement.span.end_byte)
        for statement in analysis.flagged
    ]
    source_file.remove_ranges(ranges)
    return len(ranges)
