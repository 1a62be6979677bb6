"""CLI command: cssguide fix -- rewrite stylesheets in canonical form."""

from __future__ import annotations

import difflib
import sys
from pathlib import Path

import click

from cssguide.batch import DocumentResult, process_files
from cssguide.cli.options import build_config, document_options
from cssguide.reporter import render_json, render_text


def _diff(result: DocumentResult) -> str:
    assert result.source is not None and result.fixed_text is not None
    return "".join(
        difflib.unified_diff(
            result.source.splitlines(keepends=True),
            result.fixed_text.splitlines(keepends=True),
            fromfile=f"a/{result.path}",
            tofile=f"b/{result.path}",
        )
    )


@click.command()
@document_options
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff instead of writing files")
def fix(
    paths: tuple[str, ...],
    config_path: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    preprocessor: bool | None,
    jobs: int | None,
    as_json: bool,
    group: str,
    show_diff: bool,
) -> None:
    """Fix stylesheets in place and report what could not be fixed.

    Exits with code 1 if any violation remains after fixing or any file
    cannot be processed.
    """
    config = build_config(config_path, enable, disable, preprocessor, mode="fix")
    results = process_files(paths, config, jobs=jobs)

    for result in results:
        if not result.changed:
            continue
        if show_diff:
            click.echo(_diff(result), nl=False)
            continue
        try:
            Path(result.path).write_text(result.fixed_text or "", encoding="utf-8")
        except OSError as exc:
            result.error = f"Cannot write {result.path}: {exc}"
            continue
        if not as_json:
            click.echo(f"Fixed {result.path}", err=True)

    if as_json:
        click.echo(render_json(results), nl=False)
    elif not show_diff:
        click.echo(render_text(results, group=group), nl=False)

    if any(r.violations or r.failed for r in results):
        sys.exit(1)
    sys.exit(0)
