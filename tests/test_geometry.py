"""Tests for the renderer-agnostic chart geometry."""

from __future__ import annotations

import pytest

from src.config import Y_HEADROOM
from src.geometry import build_geometry, tail_region
from src.power import TestParameters, analyze


@pytest.fixture()
def analysis():
    return analyze(TestParameters.from_effect(0.05, 0.02, 0.05, 0.80))


def test_two_series_on_shared_grid(analysis) -> None:
    geometry = build_geometry(analysis)
    null, alt = geometry.series
    assert null.key == "null" and alt.key == "alt"
    assert null.x == alt.x
    assert len(null.x) == len(null.y) == len(alt.y)
    assert "0.020" in alt.name


def test_regions_sit_on_correct_side_of_boundary(analysis) -> None:
    geometry = build_geometry(analysis)
    b = analysis.curves.boundary.value
    regions = {r.key: r for r in geometry.regions}
    assert set(regions) == {"type_one", "type_two"}

    type_one = regions["type_one"]
    assert all(x >= b for x in type_one.x)
    assert type_one.x[0] == b and type_one.y[0] == 0.0
    assert type_one.y[-1] == 0.0

    type_two = regions["type_two"]
    assert all(x <= b for x in type_two.x)
    assert type_two.y[0] == 0.0
    assert type_two.x[-1] == b and type_two.y[-1] == 0.0


def test_region_vertices_follow_their_curve(analysis) -> None:
    geometry = build_geometry(analysis)
    type_one = next(r for r in geometry.regions if r.key == "type_one")
    null = geometry.series[0]
    lookup = dict(zip(null.x, null.y))
    for x, y in zip(type_one.x[2:-1], type_one.y[2:-1]):
        assert y == pytest.approx(lookup[x])


def test_boundary_line_and_annotations(analysis) -> None:
    geometry = build_geometry(analysis)
    peak = max(max(s.y) for s in geometry.series)

    line = geometry.boundary_line
    assert line.x == analysis.curves.boundary.value
    assert line.y0 == 0.0 and line.y1 == pytest.approx(peak)
    assert geometry.y_max == pytest.approx(peak * Y_HEADROOM)

    texts = [a.text for a in geometry.annotations]
    assert texts[0] == "H₀ center: 0.0%"
    assert texts[1] == "Hₐ center: 2.0%"
    assert texts[2].startswith("Critical value (") and texts[2].endswith("%)")
    assert [a.arrow for a in geometry.annotations] == [False, False, True]


def test_tail_region_outside_range_is_none(analysis) -> None:
    curve = analysis.curves.null_curve
    assert tail_region(curve, curve.x_values[-1] + 1.0, "upper", "k", "n", "red") is None
    assert tail_region(curve, curve.x_values[0] - 1.0, "lower", "k", "n", "red") is None
    with pytest.raises(ValueError):
        tail_region(curve, 0.0, "middle", "k", "n", "red")


def test_tail_region_clips_boundary_past_far_edge(analysis) -> None:
    curve = analysis.curves.alt_curve
    x = curve.x_values

    lower = tail_region(curve, x[-1] + 1.0, "lower", "k", "n", "red")
    assert min(lower.x) == x[0] and max(lower.x) == x[-1]
    assert lower.y[0] == 0.0 and lower.y[-1] == 0.0

    upper = tail_region(curve, x[0] - 1.0, "upper", "k", "n", "red")
    assert min(upper.x) == x[0] and max(upper.x) == x[-1]
    assert upper.y[0] == 0.0 and upper.y[-1] == 0.0
