"""h2d CLI entry point: Click group with subcommands."""

import logging

import click

from h2d import __version__


@click.group()
@click.version_option(version=__version__, prog_name="h2d")
@click.option("-v", "--verbose", is_flag=True, help="Log every conversion decision.")
def cli(verbose: bool) -> None:
    """h2d - convert web pages into design documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from h2d.cli.convert import code, convert  # noqa: E402
from h2d.cli.validate import validate  # noqa: E402

cli.add_command(convert)
cli.add_command(code)
cli.add_command(validate)
