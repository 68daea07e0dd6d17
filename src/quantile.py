"""
Standard-normal quantile function (inverse CDF).

Rational approximation after P. J. Acklam: one rational function in
q = sqrt(-2 ln p) for each tail and one in r = (p - 0.5)^2 for the centre.
Relative error is below 1.15e-9 over the whole open unit interval, which is
plenty for sample-size planning.
"""
import numpy as np

# Central region numerator / denominator (denominator has an implicit leading 1)
_A = (
    -3.969683028665376e+01,
    2.209460984245205e+02,
    -2.759285104469687e+02,
    1.383577518672690e+02,
    -3.066479806614716e+01,
    2.506628277459239e+00,
)
_B = (
    -5.447609879822406e+01,
    1.615858368580409e+02,
    -1.556989798598866e+02,
    6.680131188771972e+01,
    -1.328068155288572e+01,
)

# Tail regions
_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e+00,
    -2.549732539343734e+00,
    4.374664141464968e+00,
    2.938163982698783e+00,
)
_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e+00,
    3.754408661907416e+00,
)

P_LOW = 0.02425
P_HIGH = 1 - P_LOW

def _horner(coeffs, x):
    acc = 0.0
    for c in coeffs:
        acc = acc * x + c
    return acc

def _lower_tail(p):
    q = np.sqrt(-2.0 * np.log(p))
    return _horner(_C, q) / (_horner(_D, q) * q + 1.0)

def norm_quantile(p: float) -> float:
    """
    Return z such that P(Z <= z) = p for Z ~ N(0, 1).

    p must lie strictly inside (0, 1); anything else (including NaN) gives nan
    rather than raising, so callers can treat it as "no value".
    """
    p = float(p)
    if not (0.0 < p < 1.0):
        return float("nan")

    if p < P_LOW:
        return float(_lower_tail(p))
    if p > P_HIGH:
        return float(-_lower_tail(1.0 - p))

    q = p - 0.5
    r = q * q
    return float(_horner(_A, r) * q / (_horner(_B, r) * r + 1.0))
