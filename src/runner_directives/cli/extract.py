import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from runner_directives.core.config import ExtractSettings, SettingsError, get_settings
from runner_directives.core.extract import MetadataWriteError, run_extract
from runner_directives.models import FileMetadata
from runner_directives.watcher.watchfiles_adapter import ExtractionWatcher

console = Console()
err_console = Console(stderr=True)

PatternsOption = Annotated[
    str | None, typer.Option("--patterns", "-p", help="Comma-separated glob pattern(s) to match runner files.")
]
OutputOption = Annotated[str | None, typer.Option("--output", "-o", help="Output file path for metadata JSON.")]
CwdOption = Annotated[str | None, typer.Option("--cwd", "-c", help="Working directory.")]
WorkersOption = Annotated[int | None, typer.Option(min=1, help="Number of files to process in parallel.")]


def _resolve_settings(patterns: str | None, output: str | None, cwd: str | None, workers: int | None) -> ExtractSettings:
    try:
        settings = get_settings()
    except SettingsError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    return ExtractSettings(
        patterns=patterns or settings.patterns,
        output=output or settings.output,
        cwd=cwd or settings.cwd,
        workers=workers or settings.workers,
    )


def _extract_once(settings: ExtractSettings) -> bool:
    try:
        metadata, output_path = run_extract(
            settings.patterns, settings.output, cwd=settings.cwd, workers=settings.workers
        )
    except MetadataWriteError as exc:
        err_console.print(f"[red]{exc}[/red]")
        return False
    console.print(f"[green]Extracted[/green] metadata from {len(metadata)} files")
    console.print(f"Output written to: {output_path}")
    return True


def _report_changes(changed: set[Path], metadata: list[FileMetadata], output_path: Path) -> None:
    console.print(
        f"[yellow]Changed[/yellow] {len(changed)} file(s), re-extracted metadata from {len(metadata)} files"
        f" into {output_path}"
    )


def extract(
    patterns: PatternsOption = None,
    output: OutputOption = None,
    cwd: CwdOption = None,
    workers: WorkersOption = None,
) -> None:
    """Extract runner and schema metadata from TypeScript files."""
    if not _extract_once(_resolve_settings(patterns, output, cwd, workers)):
        raise typer.Exit(code=1)


def watch(
    patterns: PatternsOption = None,
    output: OutputOption = None,
    cwd: CwdOption = None,
    workers: WorkersOption = None,
) -> None:
    """Extract metadata, then extract again whenever a source file changes."""
    settings = _resolve_settings(patterns, output, cwd, workers)
    if not _extract_once(settings):
        raise typer.Exit(code=1)

    async def _run() -> None:
        watcher = ExtractionWatcher(settings, on_extracted=_report_changes)
        await watcher.start()
        console.print(f"[green]Watching[/green] {watcher.root} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped watching")
