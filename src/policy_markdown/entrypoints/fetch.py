from __future__ import annotations

from pathlib import Path

import typer

from policy_markdown.config import PolicyConfigError, load_policy_config
from policy_markdown.entrypoints.render import write_output
from policy_markdown.policy_api import PolicyApiError, fetch_policy, render_policy


def run_fetch(
    *,
    url: str | None,
    token: str | None,
    timeout_seconds: float | None,
    output: Path | None,
    raw: bool,
) -> None:
    try:
        config = load_policy_config()
    except PolicyConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    api_url = url.strip() if url is not None else config.api_url
    if not api_url:
        raise typer.BadParameter("url must be non-empty")
    api_token = token or config.api_token
    timeout = timeout_seconds if timeout_seconds is not None else config.timeout_seconds
    if timeout <= 0:
        raise typer.BadParameter("timeout must be > 0")
    if api_token is None:
        typer.echo("No API token configured; requesting without API_TOKEN header.", err=True)

    try:
        document = fetch_policy(api_url=api_url, api_token=api_token, timeout_seconds=timeout)
    except PolicyApiError as exc:
        raise typer.BadParameter(str(exc)) from exc

    text = document.content if raw else render_policy(document)
    write_output(text, output=output)
