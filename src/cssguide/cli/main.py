"""cssguide CLI entry point: Click group with subcommands."""

import logging

import click

from cssguide import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssguide")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def cli(verbose: bool) -> None:
    """cssguide - style-guide linter and formatter for CSS and SCSS."""
    if verbose:
        logger = logging.getLogger("cssguide")
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
            logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)


# Import and register subcommands
from cssguide.cli.check import check  # noqa: E402
from cssguide.cli.fix import fix  # noqa: E402
from cssguide.cli.rules import rules  # noqa: E402

cli.add_command(check)
cli.add_command(fix)
cli.add_command(rules)
