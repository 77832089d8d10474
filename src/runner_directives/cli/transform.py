from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from runner_directives.core.syntax import ParseError
from runner_directives.core.transform import transform_file
from runner_directives.models import Diagnostic

err_console = Console(stderr=True)


def _render_diagnostics(file: str, diagnostics: Sequence[Diagnostic]) -> None:
    table = Table(title=file, show_lines=False)
    table.add_column("line")
    table.add_column("column")
    table.add_column("kind")
    table.add_column("message")
    for diagnostic in diagnostics:
        table.add_row(
            str(diagnostic.span.start_line),
            str(diagnostic.span.start_column + 1),
            diagnostic.kind.value,
            diagnostic.message,
        )
    err_console.print(table)


def transform(
    path: Annotated[str, typer.Argument(help="Path to a TypeScript or JavaScript file.")],
    output: Annotated[str | None, typer.Option("--output", "-o", help="Write the stripped code here.")] = None,
    cwd: Annotated[str | None, typer.Option("--cwd", "-c", help="Directory reported file names are relative to.")] = None,
    language: Annotated[str | None, typer.Option(help="Language name or code (ts, tsx, js).")] = None,
) -> None:
    """Strip "use runner" directives from a file and report invalid ones."""
    try:
        result = transform_file(path, cwd=cwd or str(Path.cwd()), language=language)
    except (FileNotFoundError, ParseError, ValueError) as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output:
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as exc:
            err_console.print(f"[red]Failed to write output file: {exc}[/red]")
            raise typer.Exit(code=1) from exc
        err_console.print(f"[green]Wrote[/green] {output_path}")
    else:
        typer.echo(result.code, nl=False)

    if result.diagnostics:
        _render_diagnostics(result.file, result.diagnostics)
        raise typer.Exit(code=1)


def check(
    paths: Annotated[list[str], typer.Argument(help="Files to validate.")],
    cwd: Annotated[str | None, typer.Option("--cwd", "-c", help="Directory reported file names are relative to.")] = None,
) -> None:
    """Validate "use runner" directives without writing any output."""
    failures = 0
    for path in paths:
        try:
            result = transform_file(path, cwd=cwd or str(Path.cwd()))
        except (FileNotFoundError, ParseError, ValueError) as exc:
            err_console.print(f"[red]{exc}[/red]")
            failures += 1
            continue
        if result.diagnostics:
            _render_diagnostics(result.file, result.diagnostics)
            failures += 1

    if failures:
        err_console.print(f"[red]{failures} of {len(paths)} file(s) failed[/red]")
        raise typer.Exit(code=1)
    err_console.print(f"[green]Checked[/green] {len(paths)} file(s)")
