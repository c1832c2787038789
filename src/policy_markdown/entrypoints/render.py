from __future__ import annotations

import sys
from pathlib import Path

import typer

from policy_markdown.compiler import compile_markdown


def run_render(*, input_path: Path | None, output: Path | None) -> None:
    markdown_text = _read_markdown(input_path)
    html = compile_markdown(markdown_text)
    write_output(html, output=output)


def write_output(text: str, *, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
        return
    output = output.expanduser()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(f"{text}\n", encoding="utf-8")
    typer.echo(f"Output: {output.resolve()}", err=True)


def _read_markdown(input_path: Path | None) -> str:
    if input_path is None or str(input_path) == "-":
        return sys.stdin.read()
    path = input_path.expanduser()
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"Input file is not UTF-8 text: {path}") from exc
