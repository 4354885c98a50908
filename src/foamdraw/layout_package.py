"""
Conversion from stored layout packages to drawing inputs.

A layout package is the JSON blob the quoting editor saves for a quote:
a ``block`` and a ``stack`` (or ``layers``) of layers with cavities. Older
packages use snake_case or bare keys, so every field is looked up through
a short list of aliases. Flat packages with no stack hold their cavities
at the top level and are drawn as a single layer.

Usage:
    layout = load_layout_file("Q-1001.json")
    drawing = drawing_input_from_layout(layout, quote_no="Q-1001")
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .model import Block, Cavity, CavityShape, DrawingInput, Layer

logger = logging.getLogger(__name__)

BLOCK_KEYS = {
    "length": ("lengthIn", "length_in", "length"),
    "width": ("widthIn", "width_in", "width"),
    "height": ("thicknessIn", "thickness_in", "heightIn", "height_in", "height"),
}
CAVITY_KEYS = {
    "length": ("lengthIn", "length_in", "length"),
    "width": ("widthIn", "width_in", "width"),
    "depth": ("depthIn", "depth_in", "depth"),
    "diameter": ("diameterIn", "diameter_in", "diameter"),
}
THICKNESS_KEYS = ("thicknessIn", "thickness_in", "thickness")
MATERIAL_KEYS = ("materialName", "material_name", "material")


class LayoutPackageError(ValueError):
    """Raised when a layout package cannot be turned into a drawing input."""


def _first(data: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def _number(data: dict, keys: tuple[str, ...], default: float = 0.0) -> float:
    value = _first(data, keys)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise LayoutPackageError(f"{keys[0]}={value!r} is not a number") from e


def load_layout_file(path: str | Path) -> dict:
    """Load a layout package from a JSON or YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise LayoutPackageError(f"{path}: expected a mapping at the top level")
    return data


def _convert_cavity(raw: dict, index: int, thickness_in: float) -> Cavity:
    diameter = _first(raw, CAVITY_KEYS["diameter"])
    shape = str(raw.get("shape") or "rect").lower()
    if shape not in {s.value for s in CavityShape}:
        raise LayoutPackageError(f"cavity {index}: unknown shape {shape!r}")
    return Cavity(
        id=str(raw.get("id") or f"cav_{index}"),
        shape=shape,
        x=_number(raw, ("x",)),
        y=_number(raw, ("y",)),
        length_in=_number(raw, CAVITY_KEYS["length"]),
        width_in=_number(raw, CAVITY_KEYS["width"]),
        # A cavity without a depth (or a zero one) goes through the whole layer
        depth_in=_number(raw, CAVITY_KEYS["depth"]) or thickness_in,
        diameter_in=float(diameter) if diameter is not None else None,
        points=raw.get("points"),
        label=raw.get("label") or None,
    )


def _convert_layer(raw: dict, index: int, material_names: list[str] | None) -> Layer:
    thickness = _number(raw, THICKNESS_KEYS)
    material = _first(raw, MATERIAL_KEYS)
    if material is None and material_names and index < len(material_names):
        material = material_names[index]
    cavities = raw.get("cavities") or []
    return Layer(
        id=str(raw.get("id") or f"layer_{index}"),
        label=str(raw.get("label") or f"L{index + 1}"),
        thickness_in=thickness,
        material_name=str(material or f"Layer {index + 1}"),
        cavities=tuple(_convert_cavity(c, i, thickness) for i, c in enumerate(cavities)),
    )


def _flat_layer(layout: dict, height: float, material_names: list[str] | None) -> Layer:
    """A package without a stack is one slab, as thick as the block, holding the top-level cavities."""
    if height <= 0:
        raise LayoutPackageError("layout package has no layers and no block height")
    cavities = layout.get("cavities") or []
    logger.debug("No stack in layout package; drawing %d cavities on one layer", len(cavities))
    return Layer(
        id="layer_1",
        label="L1",
        thickness_in=height,
        material_name=(material_names[0] if material_names else None) or "Foam",
        cavities=tuple(_convert_cavity(c, i, height) for i, c in enumerate(cavities)),
    )


def drawing_input_from_layout(
    layout: dict,
    quote_no: str,
    customer_name: str | None = None,
    material_names: list[str] | None = None,
    locked: bool = False,
    notes: list[str] | None = None,
    today: date | None = None,
) -> DrawingInput:
    """
    Convert a stored layout package into a drawing input.

    Args:
        layout: Layout package (``block`` plus ``stack`` or ``layers``, or
                a flat package with top-level ``cavities``)
        quote_no: Quote number for the title block
        customer_name: Customer shown in the title block
        material_names: Material per layer, in stack order, used when a
                        layer doesn't name its own material
        locked: Locked quotes are revision "A", open ones "AS"
        notes: Drawing notes; empty uses the default notes
        today: Drawing date (defaults to today)

    Returns:
        DrawingInput (not yet validated)

    Raises:
        LayoutPackageError: if the package has no usable block, or has
                            no stack and no block height
    """
    block_raw = layout.get("block") or layout.get("Block")
    if not isinstance(block_raw, dict):
        raise LayoutPackageError("layout package has no block")

    stack = layout.get("stack") or layout.get("layers") or []
    if not isinstance(stack, list):
        raise LayoutPackageError("layout package stack is not a list")

    height = _number(block_raw, BLOCK_KEYS["height"])
    if stack:
        layers = tuple(_convert_layer(raw, i, material_names) for i, raw in enumerate(stack))
        if height <= 0:
            height = sum(layer.thickness_in for layer in layers)
            logger.debug("Block height missing; using stack height %.3f", height)
    else:
        layers = (_flat_layer(layout, height, material_names),)

    block = Block(
        length_in=_number(block_raw, BLOCK_KEYS["length"]),
        width_in=_number(block_raw, BLOCK_KEYS["width"]),
        height_in=height,
    )
    return DrawingInput(
        quote_no=quote_no,
        customer_name=customer_name,
        block=block,
        layers=layers,
        revision="A" if locked else "AS",
        date=(today or date.today()).isoformat(),
        notes=tuple(notes or ()),
    )


def single_layer_drawing(drawing: DrawingInput, index: int) -> DrawingInput:
    """
    Drawing input for one layer of a stack.

    The block keeps its footprint but takes the layer's thickness as its
    height, so the single sheet reads as a standalone part.
    """
    if not 0 <= index < len(drawing.layers):
        raise LayoutPackageError(
            f"layer index {index} out of range for {len(drawing.layers)} layer(s)"
        )
    layer = drawing.layers[index]
    return replace(
        drawing,
        block=replace(drawing.block, height_in=layer.thickness_in),
        layers=(layer,),
    )
