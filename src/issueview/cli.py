"""Issueview CLI entry point."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from issueview import __version__
from issueview.config_loader import (
    ConfigurationError,
    default_display_configuration,
    discover_display_configuration,
    load_display_configuration,
)
from issueview.issue_loader import IssueLoadError, parse_issue_json
from issueview.issue_view import render_issue
from issueview.models import DisplayConfiguration

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def supports_256_colors() -> bool:
    """Report whether the terminal advertises 256-color support via TERM."""
    return "-256color" in os.getenv("TERM", "")


def _resolve_configuration(config_path: Optional[Path]) -> DisplayConfiguration:
    path = config_path or discover_display_configuration(Path.cwd())
    if path is None:
        return default_display_configuration()
    try:
        return load_display_configuration(path)
    except ConfigurationError as error:
        raise click.ClickException(str(error)) from error


@click.group()
@click.version_option(__version__, prog_name="issueview")
@click.option("--verbose", is_flag=True, default=False)
def cli(verbose: bool) -> None:
    """Issueview command line interface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@cli.command("show")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--plain", is_flag=True, default=False)
@click.option("--json", "as_json", is_flag=True, default=False)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
)
def show(
    source: TextIO, plain: bool, as_json: bool, config_path: Optional[Path]
) -> None:
    """Show an already-fetched issue JSON document.

    :param source: Issue JSON file, or ``-`` for stdin.
    :type source: TextIO
    :param plain: Disable ANSI colors.
    :type plain: bool
    :param as_json: Emit the normalized issue as JSON.
    :type as_json: bool
    :param config_path: Display configuration file.
    :type config_path: Optional[Path]
    """
    try:
        issue = parse_issue_json(source.read())
    except IssueLoadError as error:
        raise click.ClickException(str(error)) from error

    if as_json:
        payload = issue.model_dump(by_alias=True, mode="json", exclude_none=True)
        click.echo(json.dumps(payload, indent=2, sort_keys=False, ensure_ascii=False))
        return

    configuration = _resolve_configuration(config_path)
    render_issue(
        issue,
        sys.stdout,
        plain=plain or os.getenv("NO_COLOR") is not None,
        xterm256=supports_256_colors(),
        configuration=configuration,
    )
    sys.stdout.flush()


if __name__ == "__main__":
    cli()
