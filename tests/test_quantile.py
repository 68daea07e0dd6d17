"""Tests for the standard-normal quantile approximation."""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.stats import norm

from src.quantile import P_HIGH, P_LOW, norm_quantile


def test_center_is_exactly_zero() -> None:
    assert norm_quantile(0.5) == 0.0


@pytest.mark.parametrize("p", [0.0, 1.0, -0.1, 1.5, float("nan")])
def test_out_of_domain_returns_nan(p: float) -> None:
    assert math.isnan(norm_quantile(p))


@pytest.mark.parametrize(
    "p, expected",
    [
        (0.975, 1.959963984540054),
        (0.95, 1.6448536269514722),
        (0.80, 0.8416212335729143),
        (0.01, -2.3263478740408408),
    ],
)
def test_common_critical_values(p: float, expected: float) -> None:
    assert norm_quantile(p) == pytest.approx(expected, rel=1e-8)


def test_matches_scipy_across_unit_interval() -> None:
    grid = np.concatenate([
        [1e-6, 1e-4],
        np.linspace(0.001, 0.999, 999),
        [1 - 1e-4, 1 - 1e-6],
        [P_LOW, P_HIGH],
    ])
    for p in grid:
        assert norm_quantile(p) == pytest.approx(norm.ppf(p), rel=1e-8, abs=1e-12)


def test_strictly_increasing() -> None:
    grid = np.linspace(0.0005, 0.9995, 2000)
    values = np.array([norm_quantile(p) for p in grid])
    assert np.all(np.diff(values) > 0)


@pytest.mark.parametrize("p", [0.001, 0.02, 0.02425, 0.1, 0.3, 0.49])
def test_antisymmetric(p: float) -> None:
    assert norm_quantile(1 - p) == pytest.approx(-norm_quantile(p), abs=1e-9)


def test_deterministic() -> None:
    assert norm_quantile(0.8123) == norm_quantile(0.8123)
