"""CLI command: cssguide check -- report style-guide violations."""

from __future__ import annotations

import sys

import click

from cssguide.batch import process_files
from cssguide.cli.options import build_config, document_options
from cssguide.reporter import render_json, render_text


@click.command()
@document_options
def check(
    paths: tuple[str, ...],
    config_path: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    preprocessor: bool | None,
    jobs: int | None,
    as_json: bool,
    group: str,
) -> None:
    """Check stylesheets against the style guide.

    Directories are searched recursively for .css and .scss files. Exits
    with code 1 if any violation is found or any file cannot be processed.
    """
    config = build_config(config_path, enable, disable, preprocessor, mode="report")
    results = process_files(paths, config, jobs=jobs)

    if as_json:
        click.echo(render_json(results), nl=False)
    else:
        click.echo(render_text(results, group=group), nl=False)

    if any(r.violations or r.failed for r in results):
        sys.exit(1)
    sys.exit(0)
