"""CLI commands: h2d convert / h2d code -- produce a design document JSON."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from h2d.capture import context_from_capture, context_from_code, load_capture
from h2d.config import ConversionConfig
from h2d.converters import convert as run_convert
from h2d.errors import CaptureValidationError
from h2d.model.resources import ImageResource, Viewport
from h2d.resources import collect_image_urls, prefetch_images


def read_json(path: Path) -> Any:
    """Read and decode a JSON file, exiting with code 1 on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        click.echo(f"Cannot read {path.name}: {exc}", err=True)
        sys.exit(1)


def _write(result: dict[str, Any], output: str | None, indent: int) -> None:
    text = json.dumps(result, indent=indent or None, ensure_ascii=False)
    if output is None:
        click.echo(text)
        return
    Path(output).write_text(text + "\n", encoding="utf-8")
    click.echo(f"Wrote {output}", err=True)


@click.command()
@click.argument("capture", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Output file (default: stdout).")
@click.option("--indent", type=click.IntRange(min=0), default=2, show_default=True)
def convert(capture: str, output: str | None, indent: int) -> None:
    """Convert a captured page bundle into a design document.

    The bundle is validated first; any error diagnostics are printed and the
    command exits with code 1 without converting.
    """
    data = read_json(Path(capture))
    try:
        bundle = load_capture(data)
    except CaptureValidationError as exc:
        for diag in exc.diagnostics:
            click.echo(str(diag), err=True)
        sys.exit(1)

    _write(run_convert(context_from_capture(bundle)), output, indent)


@click.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--css", "css_file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Stylesheet applied before any <style> in the markup.")
@click.option("--width", type=click.IntRange(min=0), default=1440, show_default=True)
@click.option("--height", type=click.IntRange(min=0), default=900, show_default=True)
@click.option("--fetch-images", is_flag=True, help="Download referenced images first.")
@click.option("--base-url", default="", help="Base for relative image URLs.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Output file (default: stdout).")
@click.option("--indent", type=click.IntRange(min=0), default=2, show_default=True)
def code(
    html_file: str,
    css_file: str | None,
    width: int,
    height: int,
    fetch_images: bool,
    base_url: str,
    output: str | None,
    indent: int,
) -> None:
    """Convert an HTML file (and optional CSS file) into a design document."""
    html = Path(html_file).read_text(encoding="utf-8")
    css = Path(css_file).read_text(encoding="utf-8") if css_file else ""
    config = ConversionConfig()

    images: dict[str, ImageResource] = {}
    if fetch_images:
        snapshot = asyncio.run(
            prefetch_images(collect_image_urls(html), base_url=base_url, config=config)
        )
        images = dict(snapshot.images)
        if snapshot.failed:
            click.echo(f"{len(snapshot.failed)} image(s) could not be fetched", err=True)

    context = context_from_code(html, css, Viewport(width, height), images=images, config=config)
    _write(run_convert(context), output, indent)
