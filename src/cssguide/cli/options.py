"""Options shared by ``cssguide check`` and ``cssguide fix``."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

import click

from cssguide.config import StyleConfig, load_config
from cssguide.errors import ConfigError
from cssguide.reporter import GROUPS


def document_options(func: Callable) -> Callable:
    """Attach the path argument and the configuration/report options."""
    decorators = [
        click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True)),
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            help="JSON or TOML configuration file",
        ),
        click.option("--enable", multiple=True, metavar="ID", help="Enable a check (repeatable)"),
        click.option("--disable", multiple=True, metavar="ID", help="Disable a check (repeatable)"),
        click.option(
            "--preprocessor/--no-preprocessor",
            default=None,
            help="Parse nested SCSS-style syntax and run preprocessor checks",
        ),
        click.option("--jobs", "-j", type=click.IntRange(min=1), help="Worker threads"),
        click.option("--json", "as_json", is_flag=True, help="Emit a JSON report"),
        click.option(
            "--group",
            type=click.Choice(GROUPS),
            default="none",
            show_default=True,
            help="Text report grouping",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def build_config(
    config_path: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    preprocessor: bool | None,
    mode: str,
) -> StyleConfig:
    """Load the configuration file (if any) and apply command-line overrides.

    Invalid configuration is reported as a usage error before any document
    is read.
    """
    try:
        config = load_config(config_path) if config_path else StyleConfig()
        checks = dict(config.checks)
        checks.update({check_id: True for check_id in enable})
        checks.update({check_id: False for check_id in disable})
        overrides: dict = {"checks": checks, "mode": mode}
        if preprocessor is not None:
            overrides["preprocessor"] = preprocessor
        return replace(config, **overrides)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
