from pathlib import Path, PurePath

from runner_directives.core.directives import analyze_directives
from runner_directives.core.languages import DEFAULT_LANGUAGE, resolve_language
from runner_directives.core.strip import strip_directives
from runner_directives.core.syntax import parse_source
from runner_directives.models import TransformResult


def relative_filename(filename: str, cwd: str | None = None) -> str:
    """Express *filename* relative to *cwd* with forward slashes.

    When *filename* is not below *cwd* the part after their longest common
    prefix is used; with no common prefix it is returned unchanged.
    """
    normalized = filename.replace("\\", "/")
    if not cwd:
        return normalized
    file_path = PurePath(normalized)
    cwd_path = PurePath(cwd.replace("\\", "/"))
    if file_path.is_relative_to(cwd_path):
        return file_path.relative_to(cwd_path).as_posix()

    common = 0
    for file_part, cwd_part in zip(file_path.parts, cwd_path.parts):
        if file_part != cwd_part:
            break
        common += 1
    if common == 0:
        return normalized
    return PurePath(*file_path.parts[common:]).as_posix()


def transform_source(
    source: str | bytes,
    filename: str = "unknown",
    cwd: str | None = None,
    language: str | None = None,
) -> TransformResult:
    """Validate every directive in *source*, then strip them from the tree.

    Raises ``ParseError`` when the source has syntax errors.
    """
    if language is None and Path(filename).suffix:
        language = resolve_language(None, Path(filename))
    source_file = parse_source(source, language or DEFAULT_LANGUAGE, path=filename)

    # Diagnostics come from the untouched tree; stripping happens afterwards.
    analysis = analyze_directives(source_file)
    strip_directives(source_file, analysis)

    return TransformResult(
        file=relative_filename(filename, cwd),
        code=source_file.text,
        diagnostics=analysis.diagnostics,
        has_module_directive=analysis.has_module_directive,
        directive_functions=analysis.directive_functions,
    )


def transform_file(path: str, cwd: str | None = None, language: str | None = None) -> TransformResult:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return transform_source(source_bytes, str(file_path), cwd=cwd, language=language)
