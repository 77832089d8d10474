"""Build the runner/schema index for a set of source files."""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from runner_directives.core.discovery import find_exported_runners, find_exported_schemas
from runner_directives.core.files import discover_files, split_patterns
from runner_directives.core.languages import detect_language_from_path
from runner_directives.core.syntax import parse_source
from runner_directives.models import USE_RUNNER, FileMetadata

logger = logging.getLogger(__name__)

_METADATA_ADAPTER = TypeAdapter(list[FileMetadata])


class MetadataWriteError(RuntimeError):
    """Raised when the metadata index cannot be serialized or written."""


def has_use_runner_directive(content: str) -> bool:
    return f'"{USE_RUNNER}"' in content or f"'{USE_RUNNER}'" in content


def process_source(content: str, file: str, language: str) -> FileMetadata | None:
    if not has_use_runner_directive(content):
        return None

    source_file = parse_source(content, language, path=file, allow_errors=True)
    if source_file.root.has_error:
        logger.warning("Syntax errors in %s; extracting what could be parsed", file)

    runners = find_exported_runners(source_file)
    schemas = find_exported_schemas(source_file, [runner.name for runner in runners])
    return FileMetadata(file=file, runners=runners, schemas=schemas)


def process_file(path: Path) -> FileMetadata | None:
    """Extract metadata from one file, or None when it is skipped."""
    file = path.as_posix()
    try:
        language = detect_language_from_path(path)
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("Could not read file %s: %s", file, exc)
        return None
    return process_source(content, file, language)


def extract_metadata(paths: Sequence[Path], workers: int = 1) -> list[FileMetadata]:
    """Process *paths* and keep the results in input order."""
    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(process_file, paths))
    else:
        results = [process_file(path) for path in paths]
    return [metadata for metadata in results if metadata is not None]


def write_metadata(metadata: list[FileMetadata], output: str | Path) -> Path:
    output_path = Path(output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MetadataWriteError(f"Failed to create output directory: {exc}") from exc

    try:
        payload = _METADATA_ADAPTER.dump_json(metadata, indent=2)
    except PydanticSerializationError as exc:
        raise MetadataWriteError(f"Failed to serialize metadata: {exc}") from exc

    try:
        output_path.write_bytes(payload)
    except OSError as exc:
        raise MetadataWriteError(f"Failed to write output file: {exc}") from exc
    return output_path


def run_extract(patterns: str, output: str, cwd: str = ".", workers: int = 1) -> tuple[list[FileMetadata], Path]:
    """Discover files, extract their metadata and write the JSON index.

    Returns (metadata, output_path).
    """
    paths = discover_files(split_patterns(patterns), cwd)
    metadata = extract_metadata(paths, workers=workers)
    logger.info("Extracted metadata from %d of %d file(s)", len(metadata), len(paths))
    return metadata, write_metadata(metadata, output)
