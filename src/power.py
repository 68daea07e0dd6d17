"""
Sample size and sampling-distribution geometry for a two-proportion A/B test.

Convention: one-sided superiority test (H1: p2 > p1). The null variance uses
the pooled rate, the alternative variance uses the per-arm rates:

    N = ceil( (z_alpha * sqrt(2 p(1-p)) + z_power * sqrt(p1(1-p1) + p2(1-p2)))^2 / (p2 - p1)^2 )

with z_alpha = Q(1 - alpha), z_power = Q(power), p = (p1 + p2) / 2 and a floor
of MIN_SAMPLE_SIZE per group. An effect so small that the formula is not a
finite number is rejected with InputOutOfDomain.

The critical boundary z_alpha * sigma_null is guaranteed to lie strictly between
the two means only for alpha < 0.5 and power > 0.5. For alpha >= 0.5, z_alpha <= 0
and the boundary sits at or below the null mean.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy.stats import norm

from .config import CURVE_POINTS, CURVE_SPAN_SIGMAS, MIN_SAMPLE_SIZE
from .quantile import norm_quantile

logger = logging.getLogger(__name__)


class InputOutOfDomain(ValueError):
    """Raised when test parameters fall outside the region where the formula is defined."""


@dataclass(frozen=True)
class TestParameters:
    p1: float
    p2: float
    alpha: float
    power: float

    __test__ = False  # keep pytest from collecting this as a test class

    @classmethod
    def from_effect(cls, p1: float, delta: float, alpha: float, power: float) -> "TestParameters":
        return cls(p1=float(p1), p2=float(p1) + float(delta), alpha=float(alpha), power=float(power))

    @property
    def delta(self) -> float:
        return self.p2 - self.p1

    @property
    def p_pooled(self) -> float:
        return (self.p1 + self.p2) / 2


@dataclass(frozen=True)
class DerivedStatistics:
    p1: float
    p2: float
    p_pooled: float
    z_alpha: float
    z_power: float
    sigma_null: float
    sigma_alt: float
    sample_size_per_group: int


@dataclass(frozen=True)
class DistributionCurve:
    x_values: np.ndarray
    density: np.ndarray
    mean: float
    sigma: float


@dataclass(frozen=True)
class CriticalBoundary:
    value: float


@dataclass(frozen=True)
class PowerCurves:
    null_curve: DistributionCurve
    alt_curve: DistributionCurve
    boundary: CriticalBoundary


@dataclass(frozen=True)
class PowerAnalysis:
    params: TestParameters
    stats: DerivedStatistics
    curves: PowerCurves
    type_one_error: float
    type_two_error: float
    achieved_power: float


def _open_unit(name, value):
    if not np.isfinite(value):
        raise InputOutOfDomain(f"{name} must be a finite number, got {value!r}")
    if not 0.0 < value < 1.0:
        raise InputOutOfDomain(f"{name} must be in (0, 1), got {value!r}")


def validate(p1: float, p2: float, alpha: float, power: float | None = None) -> None:
    """
    Raise InputOutOfDomain unless every parameter is inside its open interval and p2 > p1.

    power may be left out when only the curves are needed.
    """
    try:
        _open_unit("p1", p1)
        _open_unit("p2", p2)
        if not p2 > p1:
            raise InputOutOfDomain(f"p2 must be greater than p1, got p1={p1!r}, p2={p2!r}")
        _open_unit("alpha", alpha)
        if power is not None:
            _open_unit("power", power)
        _open_unit("pooled rate", (p1 + p2) / 2)
    except InputOutOfDomain as exc:
        logger.debug("rejected test parameters: %s", exc)
        raise


def _pooled_variance(p1, p2):
    p = (p1 + p2) / 2
    return 2 * p * (1 - p)


def _unpooled_variance(p1, p2):
    return p1 * (1 - p1) + p2 * (1 - p2)


def compute_sample_size(p1: float, p2: float, alpha: float, power: float) -> DerivedStatistics:
    """Return the per-group sample size (and the statistics behind it) for a one-sided test."""
    validate(p1, p2, alpha, power)

    z_alpha = norm_quantile(1 - alpha)
    z_power = norm_quantile(power)

    term_null = z_alpha * np.sqrt(_pooled_variance(p1, p2))
    term_alt = z_power * np.sqrt(_unpooled_variance(p1, p2))
    with np.errstate(divide="ignore", over="ignore", under="ignore"):
        raw_n = np.float64(term_null + term_alt) ** 2 / np.float64(p2 - p1) ** 2

    # p2 - p1 can pass validation and still square to 0.0 (or the ratio overflow)
    if not np.isfinite(raw_n):
        exc = InputOutOfDomain(f"effect size too small to plan, got p1={p1!r}, p2={p2!r}")
        logger.debug("rejected test parameters: %s", exc)
        raise exc

    n = max(MIN_SAMPLE_SIZE, int(np.ceil(raw_n)))

    return DerivedStatistics(
        p1=p1,
        p2=p2,
        p_pooled=(p1 + p2) / 2,
        z_alpha=z_alpha,
        z_power=z_power,
        sigma_null=float(np.sqrt(_pooled_variance(p1, p2) / n)),
        sigma_alt=float(np.sqrt(_unpooled_variance(p1, p2) / n)),
        sample_size_per_group=n,
    )


def normal_pdf(x, mu, sigma):
    x = np.asarray(x, dtype=float)
    return np.exp(-0.5 * ((x - mu) / sigma) ** 2) / (sigma * np.sqrt(2 * np.pi))


def build_curves(p1: float, p2: float, n: int, alpha: float, points: int = CURVE_POINTS) -> PowerCurves:
    """
    Sample the null (centred at 0) and alternative (centred at p2 - p1) distributions
    of the observed difference at n users per group, on one shared x grid.
    """
    if n < 1:
        raise InputOutOfDomain(f"n must be at least 1, got {n!r}")
    if points < 200:
        raise ValueError(f"points must be at least 200, got {points!r}")
    validate(p1, p2, alpha)

    delta = p2 - p1
    sigma_null = float(np.sqrt(_pooled_variance(p1, p2) / n))
    sigma_alt = float(np.sqrt(_unpooled_variance(p1, p2) / n))

    span = CURVE_SPAN_SIGMAS * max(sigma_null, sigma_alt)
    x = np.linspace(min(0.0, delta) - span, max(0.0, delta) + span, points)

    null_curve = DistributionCurve(x, normal_pdf(x, 0.0, sigma_null), 0.0, sigma_null)
    alt_curve = DistributionCurve(x, normal_pdf(x, delta, sigma_alt), delta, sigma_alt)
    boundary = CriticalBoundary(norm_quantile(1 - alpha) * sigma_null)

    return PowerCurves(null_curve=null_curve, alt_curve=alt_curve, boundary=boundary)


def analyze(params: TestParameters, points: int = CURVE_POINTS) -> PowerAnalysis:
    """Full recompute for one set of inputs: sample size, curves and the error rates they imply."""
    stats = compute_sample_size(params.p1, params.p2, params.alpha, params.power)
    curves = build_curves(params.p1, params.p2, stats.sample_size_per_group, params.alpha, points=points)

    b = curves.boundary.value
    type_one = float(norm.sf(b / stats.sigma_null))
    type_two = float(norm.cdf((b - params.delta) / stats.sigma_alt))

    return PowerAnalysis(
        params=params,
        stats=stats,
        curves=curves,
        type_one_error=type_one,
        type_two_error=type_two,
        achieved_power=1.0 - type_two,
    )
