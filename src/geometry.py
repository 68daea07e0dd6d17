"""
Renderer-agnostic chart geometry for the null/alternative distribution plot.

Everything here is plain points and strings; charts.py turns it into Plotly
or Matplotlib objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .config import COLORS, REGION_LABELS, Y_HEADROOM
from .insights import format_pct
from .power import PowerAnalysis, normal_pdf


@dataclass(frozen=True)
class Series:
    key: str
    name: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]
    color: str
    fill: str


@dataclass(frozen=True)
class Region:
    """Closed polygon; the last vertex joins back to the first."""

    key: str
    name: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]
    fill: str


@dataclass(frozen=True)
class ReferenceLine:
    x: float
    y0: float
    y1: float
    name: str
    color: str


@dataclass(frozen=True)
class Annotation:
    x: float
    y: float
    text: str
    color: str
    arrow: bool = False


@dataclass(frozen=True)
class ChartGeometry:
    series: Tuple[Series, ...]
    regions: Tuple[Region, ...]
    boundary_line: ReferenceLine
    annotations: Tuple[Annotation, ...]
    y_max: float


def _as_tuple(values):
    return tuple(float(v) for v in values)


def tail_region(curve, boundary, side, key, name, fill):
    """
    Polygon under `curve` between the boundary and one edge of the x range.
    side="upper" shades [boundary, x_max], side="lower" shades [x_min, boundary].
    Returns None when the boundary lies outside the sampled range on that side;
    a boundary past the other edge is clipped to the range.
    """
    if side not in ("upper", "lower"):
        raise ValueError(f"side must be 'upper' or 'lower', got {side!r}")

    x = curve.x_values
    if (side == "upper" and boundary > x[-1]) or (side == "lower" and boundary < x[0]):
        return None

    edge = float(min(max(boundary, x[0]), x[-1]))
    e_y = float(normal_pdf(edge, curve.mean, curve.sigma))

    if side == "upper":
        inside = x[x > edge]
        xs = [edge, edge] + list(inside) + [x[-1]]
        ys = [0.0, e_y] + list(normal_pdf(inside, curve.mean, curve.sigma)) + [0.0]
    else:
        inside = x[x < edge]
        xs = [x[0]] + list(inside) + [edge, edge]
        ys = [0.0] + list(normal_pdf(inside, curve.mean, curve.sigma)) + [e_y, 0.0]

    return Region(key=key, name=name, x=_as_tuple(xs), y=_as_tuple(ys), fill=fill)


def build_geometry(analysis: PowerAnalysis) -> ChartGeometry:
    curves = analysis.curves
    null, alt = curves.null_curve, curves.alt_curve
    boundary = curves.boundary.value
    delta = analysis.params.delta

    peak = float(max(np.max(null.density), np.max(alt.density)))

    series = (
        Series("null", "Null hypothesis (H₀: δ = 0)",
               _as_tuple(null.x_values), _as_tuple(null.density), COLORS["null"], COLORS["null_fill"]),
        Series("alt", f"Alternative hypothesis (Hₐ: δ = {delta:.3f})",
               _as_tuple(alt.x_values), _as_tuple(alt.density), COLORS["alt"], COLORS["alt_fill"]),
    )

    regions = tuple(
        r for r in (
            tail_region(null, boundary, "upper", "type_one", REGION_LABELS["type_one"], COLORS["type_one"]),
            tail_region(alt, boundary, "lower", "type_two", REGION_LABELS["type_two"], COLORS["type_two"]),
        )
        if r is not None
    )

    line = ReferenceLine(x=boundary, y0=0.0, y1=peak, name="Critical value", color=COLORS["boundary"])

    annotations = (
        Annotation(0.0, 0.0, f"H₀ center: {format_pct(0.0)}", COLORS["null"]),
        Annotation(delta, 0.0, f"Hₐ center: {format_pct(delta)}", COLORS["alt"]),
        Annotation(boundary, peak * Y_HEADROOM * 0.9, f"Critical value ({format_pct(boundary)})",
                   COLORS["boundary"], arrow=True),
    )

    return ChartGeometry(
        series=series,
        regions=regions,
        boundary_line=line,
        annotations=annotations,
        y_max=peak * Y_HEADROOM,
    )
