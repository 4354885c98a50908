"""
Geometry model for layered foam inserts.

The drawing engine consumes one immutable ``DrawingInput``: an outer block,
the layers stacked inside it (index 0 is the base layer), and the cavities
cut into each layer. These records are built once by the caller and are
never modified by the engine.

Cavity positions (``x``, ``y``) are normalized to the block footprint:
``x`` runs from the left edge along the block length, ``y`` runs from the
top edge (as seen in plan) along the block width.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Slack allowed when comparing stacked thicknesses and footprints
FIT_TOLERANCE_IN = 1e-6


class CavityShape(str, Enum):
    RECT = "rect"
    CIRCLE = "circle"
    POLY = "poly"


class DrawingInputError(ValueError):
    """Raised when a drawing input cannot be drawn. Lists every problem found."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        summary = "; ".join(self.problems)
        super().__init__(f"Invalid drawing input ({len(self.problems)} problem(s)): {summary}")


def _to_points(value) -> tuple[tuple[float, float], ...] | None:
    """Convert a list of {x, y} dicts or pairs to a tuple of float pairs."""
    if value is None:
        return None
    points = []
    for p in value:
        if isinstance(p, dict):
            points.append((float(p["x"]), float(p["y"])))
        else:
            points.append((float(p[0]), float(p[1])))
    return tuple(points)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among ``keys``."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _shape_problem(data: dict, where: str) -> str | None:
    shape = str(_pick(data, "shape", default="rect")).lower()
    if shape not in {s.value for s in CavityShape}:
        return f"{where}: unknown shape {shape!r}"
    return None


def _layer_shape_problems(layers: list) -> list[str]:
    """Unknown cavity shapes across every layer, found before any record is built."""
    problems = []
    for i, layer in enumerate(layers):
        if isinstance(layer, Layer):
            continue
        for j, cavity in enumerate(layer.get("cavities") or []):
            if isinstance(cavity, Cavity):
                continue
            problem = _shape_problem(cavity, f"layer {i} cavity {_pick(cavity, 'id', default=j)}")
            if problem:
                problems.append(problem)
    return problems


@dataclass(frozen=True)
class Block:
    """Outer envelope of the whole stack, in inches."""
    length_in: float
    width_in: float
    height_in: float

    @classmethod
    def from_dict(cls, data: dict) -> "Block":
        return cls(
            length_in=float(_pick(data, "lengthIn", "length_in", default=0.0)),
            width_in=float(_pick(data, "widthIn", "width_in", default=0.0)),
            height_in=float(_pick(data, "heightIn", "height_in", default=0.0)),
        )


@dataclass(frozen=True)
class Cavity:
    """
    A pocket cut into one layer.

    Attributes:
        id: Cavity identifier
        shape: rect, circle or poly
        x, y: Normalized position of the cavity's top-left corner in the footprint
        length_in: Extent along the block length
        width_in: Extent along the block width
        depth_in: Depth into the layer from its top face
        diameter_in: Circle diameter; defaults to min(length, width)
        points: Poly outline in normalized footprint coordinates
        label: Optional text drawn on the plan view
    """
    id: str
    shape: CavityShape
    x: float
    y: float
    length_in: float
    width_in: float
    depth_in: float
    diameter_in: float | None = None
    points: tuple[tuple[float, float], ...] | None = None
    label: str | None = None

    def __post_init__(self):
        # Accept plain strings and lists from JSON/YAML loading
        if not isinstance(self.shape, CavityShape):
            object.__setattr__(self, "shape", CavityShape(str(self.shape).lower()))
        if self.points is not None and not isinstance(self.points, tuple):
            object.__setattr__(self, "points", _to_points(self.points))

    @property
    def effective_diameter(self) -> float:
        """Diameter used for drawing a circle cavity."""
        if self.diameter_in:
            return self.diameter_in
        return min(self.length_in, self.width_in)

    def clamped_depth(self, thickness_in: float) -> float:
        """Depth as drawn: a cavity never goes deeper than its layer."""
        return min(self.depth_in, thickness_in)

    def footprint(self, block: Block) -> tuple[float, float, float, float]:
        """
        Plan extent in inches as (x0, y0, x1, y1).

        ``y`` is measured from the top edge of the footprint, like the
        normalized position. Circles report the square around the circle.
        """
        x0 = self.x * block.length_in
        y0 = self.y * block.width_in
        if self.shape is CavityShape.CIRCLE:
            d = self.effective_diameter
            cx = x0 + self.length_in / 2
            cy = y0 + self.width_in / 2
            return (cx - d / 2, cy - d / 2, cx + d / 2, cy + d / 2)
        return (x0, y0, x0 + self.length_in, y0 + self.width_in)

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> "Cavity":
        problem = _shape_problem(data, f"cavity {index}")
        if problem:
            raise DrawingInputError([problem])
        diameter = _pick(data, "diameterIn", "diameter_in")
        return cls(
            id=str(_pick(data, "id", default=f"cav_{index}")),
            shape=str(_pick(data, "shape", default="rect")),
            x=float(_pick(data, "x", default=0.0)),
            y=float(_pick(data, "y", default=0.0)),
            length_in=float(_pick(data, "lengthIn", "length_in", default=0.0)),
            width_in=float(_pick(data, "widthIn", "width_in", default=0.0)),
            depth_in=float(_pick(data, "depthIn", "depth_in", default=0.0)),
            diameter_in=float(diameter) if diameter is not None else None,
            points=_to_points(data.get("points")),
            label=data.get("label"),
        )


@dataclass(frozen=True)
class Layer:
    """One foam slab of a single material and thickness."""
    id: str
    label: str
    thickness_in: float
    material_name: str = ""
    cavities: tuple[Cavity, ...] = ()

    def __post_init__(self):
        if not isinstance(self.cavities, tuple):
            object.__setattr__(self, "cavities", tuple(self.cavities))

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> "Layer":
        return cls(
            id=str(_pick(data, "id", default=f"layer_{index}")),
            label=str(_pick(data, "label", default=f"L{index + 1}")),
            thickness_in=float(_pick(data, "thicknessIn", "thickness_in", default=0.0)),
            material_name=str(_pick(data, "materialName", "material_name", default="")),
            cavities=tuple(
                c if isinstance(c, Cavity) else Cavity.from_dict(c, i)
                for i, c in enumerate(data.get("cavities") or [])
            ),
        )


@dataclass(frozen=True)
class DrawingInput:
    """
    Everything needed to draw one quote's foam insert.

    ``date`` of None means "the generation date"; the assembler resolves it.
    """
    quote_no: str
    block: Block
    layers: tuple[Layer, ...]
    customer_name: str | None = None
    revision: str = "AS"
    date: str | None = None
    notes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.layers, tuple):
            object.__setattr__(self, "layers", tuple(self.layers))
        if not isinstance(self.notes, tuple):
            object.__setattr__(self, "notes", tuple(self.notes))

    @property
    def stack_height_in(self) -> float:
        return sum(layer.thickness_in for layer in self.layers)

    @classmethod
    def from_dict(cls, data: dict) -> "DrawingInput":
        """
        Build from the camelCase JSON contract (snake_case keys also accepted).

        Raises:
            DrawingInputError: listing every cavity with an unknown shape
        """
        block = data.get("block") or {}
        shape_problems = _layer_shape_problems(data.get("layers") or [])
        if shape_problems:
            raise DrawingInputError(shape_problems)
        return cls(
            quote_no=str(_pick(data, "quoteNo", "quote_no", default="")),
            customer_name=_pick(data, "customerName", "customer_name"),
            block=block if isinstance(block, Block) else Block.from_dict(block),
            layers=tuple(
                layer if isinstance(layer, Layer) else Layer.from_dict(layer, i)
                for i, layer in enumerate(data.get("layers") or [])
            ),
            revision=str(_pick(data, "revision", default="AS")),
            date=data.get("date"),
            notes=tuple(str(n) for n in data.get("notes") or []),
        )


# =============================================================================
# VALIDATION
# =============================================================================

def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _check_cavity(cavity: Cavity, where: str) -> list[str]:
    problems = []
    for name, value in (("x", cavity.x), ("y", cavity.y)):
        if not (math.isfinite(value) and 0.0 <= value <= 1.0):
            problems.append(f"{where}: {name}={value} is outside [0, 1]")
    for name, value in (("lengthIn", cavity.length_in), ("widthIn", cavity.width_in),
                        ("depthIn", cavity.depth_in)):
        if not math.isfinite(value) or value < 0:
            problems.append(f"{where}: {name}={value} must be >= 0")
    if cavity.shape is CavityShape.CIRCLE:
        if cavity.diameter_in is not None and not _positive(cavity.diameter_in):
            problems.append(f"{where}: diameterIn={cavity.diameter_in} must be > 0")
    if cavity.shape is CavityShape.POLY and cavity.points:
        for px, py in cavity.points:
            if not (0.0 <= px <= 1.0 and 0.0 <= py <= 1.0):
                problems.append(f"{where}: poly point ({px}, {py}) is outside [0, 1]")
                break
    return problems


def _check_fit(drawing: DrawingInput) -> list[str]:
    """Stack height and footprint containment checks."""
    problems = []
    block = drawing.block
    stack = drawing.stack_height_in
    if abs(stack - block.height_in) > FIT_TOLERANCE_IN:
        problems.append(
            f"layer thicknesses sum to {stack:.4f} in but block height is {block.height_in:.4f} in"
        )
    for i, layer in enumerate(drawing.layers):
        for cavity in layer.cavities:
            x0, y0, x1, y1 = cavity.footprint(block)
            if (x0 < -FIT_TOLERANCE_IN or y0 < -FIT_TOLERANCE_IN
                    or x1 > block.length_in + FIT_TOLERANCE_IN
                    or y1 > block.width_in + FIT_TOLERANCE_IN):
                problems.append(
                    f"layer {i} ({layer.label}) cavity {cavity.id} extends outside the block footprint"
                )
    return problems


def validate_drawing_input(drawing: DrawingInput, strict: bool = False) -> None:
    """
    Check a drawing input before any page is drawn.

    Geometry that cannot be drawn (non-positive block or layer sizes, an
    empty layer list, out-of-range cavity positions) always raises. Stack
    height and footprint containment problems are logged as warnings, or
    raised when ``strict`` is set.

    Raises:
        DrawingInputError: listing every problem found
    """
    problems = []
    block = drawing.block
    for name, value in (("lengthIn", block.length_in), ("widthIn", block.width_in),
                        ("heightIn", block.height_in)):
        if not _positive(value):
            problems.append(f"block {name}={value} must be > 0")

    if not drawing.layers:
        problems.append("at least one layer is required")

    for i, layer in enumerate(drawing.layers):
        if not _positive(layer.thickness_in):
            problems.append(f"layer {i} ({layer.label}): thicknessIn={layer.thickness_in} must be > 0")
        for cavity in layer.cavities:
            problems.extend(_check_cavity(cavity, f"layer {i} ({layer.label}) cavity {cavity.id}"))

    if problems:
        raise DrawingInputError(problems)

    fit_problems = _check_fit(drawing)
    if fit_problems and strict:
        raise DrawingInputError(fit_problems)
    for problem in fit_problems:
        logger.warning("Quote %s: %s", drawing.quote_no, problem)
