from pathlib import Path
from typing import Annotated

import typer

app = typer.Typer(add_completion=False)


@app.command()
def version() -> None:
    """Print version."""
    from policy_markdown import __version__

    typer.echo(__version__)


@app.command()
def render(
    *,
    input_path: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            dir_okay=False,
            help="Markdown file to compile (default: read stdin; '-' also reads stdin).",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", dir_okay=False, help="Write HTML here instead of stdout."),
    ] = None,
) -> None:
    """Compile a Markdown document to an HTML fragment."""
    from policy_markdown.entrypoints.render import run_render

    run_render(input_path=input_path, output=output)


@app.command()
def fetch(
    *,
    url: Annotated[
        str | None,
        typer.Option(help="Policy endpoint URL (default: from config)."),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(help="API token sent as the API_TOKEN header (default: from config)."),
    ] = None,
    timeout_seconds: Annotated[
        float | None,
        typer.Option("--timeout", help="Request timeout in seconds (default: from config)."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", dir_okay=False, help="Write the result here instead of stdout."),
    ] = None,
    raw: Annotated[
        bool,
        typer.Option(help="Print the fetched Markdown instead of compiling it."),
    ] = False,
) -> None:
    """Fetch the policy document and compile it to HTML."""
    from policy_markdown.entrypoints.fetch import run_fetch

    run_fetch(
        url=url,
        token=token,
        timeout_seconds=timeout_seconds,
        output=output,
        raw=raw,
    )


def main() -> None:
    app()
