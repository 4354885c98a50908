"""
Command-line interface for foam insert layer drawings.

Commands:
- render: Render a layout file to a multi-page PDF (and optionally SVGs)
- validate: Check a layout file without rendering

A layout file is JSON or YAML holding either a drawing input (``quoteNo``,
``block``, ``layers``) or a stored layout package (``block`` plus
``stack``).

Usage:
    foamdraw render Q-1001.json -o Q-1001.pdf --customer "ACME"
    foamdraw render Q-1001.json -o layer2.pdf --layer 2
    foamdraw validate Q-1001.json --strict
"""

import logging
from dataclasses import replace
from pathlib import Path

import click

from .drawing_generator import FoamDrawing
from .layout_package import (
    drawing_input_from_layout,
    load_layout_file,
    single_layer_drawing,
)
from .logging_config import setup_logging
from .model import DrawingInput, validate_drawing_input


def _load_drawing(
    layout_file: Path,
    quote_no: str | None,
    customer: str | None,
    locked: bool,
    notes: tuple[str, ...],
) -> DrawingInput:
    """Read a layout file and build the drawing input it describes."""
    try:
        data = load_layout_file(layout_file)
        if "quoteNo" in data or "quote_no" in data:
            drawing = DrawingInput.from_dict(data)
            overrides = {}
            if quote_no:
                overrides["quote_no"] = quote_no
            if customer:
                overrides["customer_name"] = customer
            if notes:
                overrides["notes"] = notes
            if locked:
                overrides["revision"] = "A"
            if overrides:
                drawing = replace(drawing, **overrides)
            return drawing
        return drawing_input_from_layout(
            data,
            quote_no=quote_no or layout_file.stem,
            customer_name=customer,
            locked=locked,
            notes=list(notes),
        )
    except (OSError, ValueError) as e:
        raise click.ClickException(f"{layout_file}: {e}") from e


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """foamdraw - dimensioned layer drawings for foam inserts."""
    pass


@cli.command()
@click.argument("layout_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output PDF path (default: LAYOUT_FILE with a .pdf suffix).",
)
@click.option("--quote-no", default=None, help="Quote number (default: from the file or its name).")
@click.option("--customer", default=None, help="Customer name for the title block.")
@click.option(
    "--layer", "layer_number",
    type=click.IntRange(min=1),
    default=None,
    help="Render only this layer (1 = base layer).",
)
@click.option("--locked", is_flag=True, help="Mark the quote as locked (revision A).")
@click.option("--note", "notes", multiple=True, help="Drawing note; repeat for several notes.")
@click.option(
    "--svg-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write one SVG per page into this directory.",
)
@click.option("--strict", is_flag=True, help="Fail on stack height or footprint mismatches.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def render(
    layout_file: Path,
    output: Path | None,
    quote_no: str | None,
    customer: str | None,
    layer_number: int | None,
    locked: bool,
    notes: tuple[str, ...],
    svg_dir: Path | None,
    strict: bool,
    verbose: bool,
):
    """
    Render a layout file to a layer drawing PDF.

    One sheet is produced per layer, base layer first.

    Example:
        foamdraw render Q-1001.json -o Q-1001.pdf --note "FOAM: 2LB PE"
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    drawing = _load_drawing(layout_file, quote_no, customer, locked, notes)
    if layer_number is not None:
        try:
            drawing = single_layer_drawing(drawing, layer_number - 1)
        except ValueError as e:
            raise click.ClickException(str(e)) from e

    output = output or layout_file.with_suffix(".pdf")
    foam_drawing = FoamDrawing(drawing, strict=strict)
    try:
        foam_drawing.generate()
        foam_drawing.export_pdf(output)
        if svg_dir is not None:
            svg_dir.mkdir(parents=True, exist_ok=True)
            foam_drawing.export_svg(svg_dir / output.stem)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Wrote {foam_drawing.page_count} page(s) to {output}")


@cli.command()
@click.argument("layout_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Treat stack height or footprint mismatches as errors.")
def validate(layout_file: Path, strict: bool):
    """
    Validate a layout file without rendering it.

    Example:
        foamdraw validate Q-1001.json --strict
    """
    setup_logging(logging.WARNING)

    drawing = _load_drawing(layout_file, None, None, False, ())
    try:
        validate_drawing_input(drawing, strict=strict)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Layout is valid.")
    click.echo(f"  Quote:  {drawing.quote_no}")
    click.echo(f'  Block:  {drawing.block.length_in:.2f}" x {drawing.block.width_in:.2f}" '
               f'x {drawing.block.height_in:.2f}"')
    for i, layer in enumerate(drawing.layers, start=1):
        click.echo(f'    {i}. {layer.label}: {layer.thickness_in:.2f}", '
                   f"{len(layer.cavities)} cavities")


if __name__ == "__main__":
    cli()
