import logging

import typer

from runner_directives.cli.extract import extract, watch
from runner_directives.cli.transform import check, transform

app = typer.Typer(
    name="runner-directives",
    help='Validate, strip and index "use runner" directives.',
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("extract")(extract)
app.command("watch")(watch)
app.command("transform")(transform)
app.command("check")(check)


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    app()
