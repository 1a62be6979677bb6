"""CLI command: cssguide rules -- list the registered checks."""

from __future__ import annotations

import click

from cssguide.checks import ALL_CHECKS


@click.command()
def rules() -> None:
    """List every registered check with its severity and fixability."""
    width = max(len(spec.id) for spec in ALL_CHECKS)
    for spec in ALL_CHECKS:
        flags = []
        if spec.preprocessor_only:
            flags.append("preprocessor")
        if not spec.enabled_by_default:
            flags.append("off by default")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"{spec.id:<{width}}  {spec.severity.value:<7}  fix={spec.fixable:<7}  "
            f"{spec.description}{suffix}"
        )
