"""
Orthographic view projection for one foam layer.

A layer is a box in physical space with axes (length, width, thickness).
Each view kind is described by a ``ViewSpec``: a 2x3 axis selector that
picks the physical axes shown horizontally and vertically, whether the
vertical axis reads the footprint's top-down ``y`` (and so is mirrored),
and how cavity depth is anchored inside the layer.

``project_view`` is the single projection routine for all three kinds.
It fits the two physical spans into the column's viewport with one
uniform scale, centers the result, and returns page-space geometry
(bottom-left origin, Y up). It draws nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..model import Block, Cavity, CavityShape, Layer
from .constants import DIMENSION_GUTTER, FILL_FACTOR
from .view_area import ViewArea


class ViewKind(str, Enum):
    FRONT = "front"
    TOP = "top"
    RIGHT = "right"


class CavityDepthAnchor(Enum):
    """Which face of the layer a cavity's depth is measured from."""
    TOP = "top"
    BOTTOM = "bottom"


# Cavities are pockets cut down from the top face of their layer
CAVITY_DEPTH_ANCHOR = CavityDepthAnchor.TOP


@dataclass(frozen=True)
class ViewSpec:
    """
    Declarative description of one view kind.

    Attributes:
        kind: Which view this describes
        header: Column header text
        axis_map: Rows select the physical axis (length, width, thickness)
                  shown on the page's horizontal and vertical axes
        flip_v: Mirror the vertical axis (the plan's y runs top-down)
        depth_anchor: Cavity depth anchoring, None if depth is not visible
    """
    kind: ViewKind
    header: str
    axis_map: tuple[tuple[float, float, float], tuple[float, float, float]]
    flip_v: bool = False
    depth_anchor: CavityDepthAnchor | None = None

    @property
    def matrix(self) -> np.ndarray:
        return np.array(self.axis_map, dtype=float)


VIEW_SPECS: dict[ViewKind, ViewSpec] = {
    ViewKind.FRONT: ViewSpec(
        kind=ViewKind.FRONT,
        header="FRONT VIEW (L×H)",
        axis_map=((1, 0, 0), (0, 0, 1)),
        depth_anchor=CAVITY_DEPTH_ANCHOR,
    ),
    ViewKind.TOP: ViewSpec(
        kind=ViewKind.TOP,
        header="TOP VIEW (L×W)",
        axis_map=((1, 0, 0), (0, 1, 0)),
        flip_v=True,
    ),
    ViewKind.RIGHT: ViewSpec(
        kind=ViewKind.RIGHT,
        header="RIGHT VIEW (W×H)",
        axis_map=((0, 1, 0), (0, 0, 1)),
        depth_anchor=CAVITY_DEPTH_ANCHOR,
    ),
}

# Column order on the sheet, left to right
VIEW_ORDER = (ViewKind.FRONT, ViewKind.TOP, ViewKind.RIGHT)


@dataclass(frozen=True)
class ProjectedCavity:
    """
    A cavity mapped into one view.

    Attributes:
        cavity: Source cavity
        box: Page-space bounding rectangle
        spans_in: Physical (horizontal, vertical) extents as seen in this view
        depth_in: Drawn depth (clamped to the layer), None in plan
        circle: (cx, cy, r) in page space for circles in plan
        polygon: Page-space outline for poly cavities in plan
    """
    cavity: Cavity
    box: ViewArea
    spans_in: tuple[float, float] = (0.0, 0.0)
    depth_in: float | None = None
    circle: tuple[float, float, float] | None = None
    polygon: tuple[tuple[float, float], ...] | None = None


@dataclass(frozen=True)
class ViewGeometry:
    """Result of projecting a layer into one view column."""
    spec: ViewSpec
    column: ViewArea
    viewport: ViewArea
    dims_in: tuple[float, float]
    scale: float
    origin: tuple[float, float]
    outline: ViewArea
    cavities: tuple[ProjectedCavity, ...]

    @property
    def kind(self) -> ViewKind:
        return self.spec.kind


def compute_view_scale(available_width: float, available_height: float,
                       dim1: float, dim2: float) -> float:
    """
    Uniform scale that fits a ``dim1`` x ``dim2`` shape into the viewport.

    The fill factor leaves room inside the viewport for dimension gutters.
    """
    if dim1 <= 0 or dim2 <= 0:
        raise ValueError(f"Cannot scale a view with spans {dim1} x {dim2}")
    return min(available_width / dim1, available_height / dim2) * FILL_FACTOR


def depth_range(cavity: Cavity, thickness_in: float,
                anchor: CavityDepthAnchor) -> tuple[float, float]:
    """Vertical extent (z0, z1) of a cavity inside its layer."""
    depth = cavity.clamped_depth(thickness_in)
    if anchor is CavityDepthAnchor.TOP:
        return (thickness_in - depth, thickness_in)
    return (0.0, depth)


class _Mapper:
    """Physical (length, width, thickness) inches -> page points for one view."""

    def __init__(self, spec: ViewSpec, dims: tuple[float, float],
                 scale: float, origin: tuple[float, float]):
        self.matrix = spec.matrix
        self.flip_v = spec.flip_v
        self.dims = dims
        self.scale = scale
        self.origin = origin

    def point(self, physical) -> tuple[float, float]:
        u, v = self.matrix @ np.asarray(physical, dtype=float)
        if self.flip_v:
            v = self.dims[1] - v
        return (float(self.origin[0] + u * self.scale), float(self.origin[1] + v * self.scale))

    def spans(self, extents) -> tuple[float, float]:
        """Physical extents (length, width, thickness) seen along the page axes."""
        u, v = self.matrix @ np.asarray(extents, dtype=float)
        return (float(u), float(v))

    def box(self, lo, hi) -> ViewArea:
        x0, y0 = self.point(lo)
        x1, y1 = self.point(hi)
        return ViewArea(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )


def _project_cavity(cavity: Cavity, block: Block, layer: Layer,
                    spec: ViewSpec, mapper: _Mapper) -> ProjectedCavity:
    x0, y0, x1, y1 = cavity.footprint(block)
    thickness = layer.thickness_in

    if spec.depth_anchor is None:
        box = mapper.box((x0, y0, 0.0), (x1, y1, thickness))
        spans = mapper.spans((x1 - x0, y1 - y0, thickness))
        circle = None
        polygon = None
        if cavity.shape is CavityShape.CIRCLE:
            cx, cy = mapper.point(((x0 + x1) / 2, (y0 + y1) / 2, 0.0))
            circle = (cx, cy, cavity.effective_diameter / 2 * mapper.scale)
        elif cavity.shape is CavityShape.POLY and cavity.points and len(cavity.points) >= 3:
            polygon = tuple(
                mapper.point((px * block.length_in, py * block.width_in, 0.0))
                for px, py in cavity.points
            )
        return ProjectedCavity(cavity=cavity, box=box, spans_in=spans,
                               circle=circle, polygon=polygon)

    z0, z1 = depth_range(cavity, thickness, spec.depth_anchor)
    box = mapper.box((x0, y0, z0), (x1, y1, z1))
    spans = mapper.spans((x1 - x0, y1 - y0, z1 - z0))
    return ProjectedCavity(cavity=cavity, box=box, spans_in=spans, depth_in=z1 - z0)


def project_view(block: Block, layer: Layer, kind: ViewKind,
                 column: ViewArea) -> ViewGeometry:
    """
    Project one layer into a view column.

    Args:
        block: Outer block (supplies length and width)
        layer: The layer drawn on this page (supplies thickness and cavities)
        kind: Front, Top or Right
        column: Column bounds on the page

    Returns:
        ViewGeometry with the scale, origin, outline and cavity geometry
    """
    spec = VIEW_SPECS[kind]
    spans = np.array([block.length_in, block.width_in, layer.thickness_in], dtype=float)
    dim1, dim2 = (float(d) for d in spec.matrix @ spans)

    viewport = column.inset(DIMENSION_GUTTER)
    scale = compute_view_scale(viewport.width, viewport.height, dim1, dim2)
    origin = (
        viewport.x + (viewport.width - dim1 * scale) / 2,
        viewport.y + (viewport.height - dim2 * scale) / 2,
    )

    mapper = _Mapper(spec, (dim1, dim2), scale, origin)
    outline = mapper.box((0.0, 0.0, 0.0), spans)
    cavities = tuple(
        _project_cavity(cavity, block, layer, spec, mapper) for cavity in layer.cavities
    )

    return ViewGeometry(
        spec=spec,
        column=column,
        viewport=viewport,
        dims_in=(dim1, dim2),
        scale=scale,
        origin=origin,
        outline=outline,
        cavities=cavities,
    )
