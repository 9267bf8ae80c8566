"""CLI command: h2d validate -- check a capture bundle file."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from h2d.capture import validate_capture
from h2d.cli.convert import read_json


@click.command()
@click.argument("capture", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print diagnostics as a JSON list.")
def validate(capture: str, as_json: bool) -> None:
    """Check a capture bundle without converting it.

    Exit code is 1 when any ERROR diagnostic is found; warnings alone
    still exit 0.
    """
    path = Path(capture)
    diagnostics = validate_capture(read_json(path))
    error_count = sum(1 for d in diagnostics if d.is_error)

    if as_json:
        click.echo(json.dumps([d.to_dict() for d in diagnostics], indent=2))
    elif not diagnostics:
        click.echo(f"OK: {path.name} is valid (0 diagnostics)")
    else:
        for diag in diagnostics:
            click.echo(str(diag))
        click.echo()
        click.echo(
            f"Summary: {error_count} error(s), {len(diagnostics) - error_count} warning(s)"
        )

    sys.exit(1 if error_count else 0)
