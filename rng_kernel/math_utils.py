"""
RNG Kernel — Shared Numeric Helpers

probit() is the inverse of the standard normal CDF, using Peter Acklam's
rational approximation (relative error below 1.15e-9) followed by one
Newton step against math.erfc, which brings it to near double precision.
"""

from __future__ import annotations

import math

from .errors import InvalidParameterError


# ── Acklam coefficients ───────────────────────────────────────
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

PROBIT_LOW: float = 0.02425
PROBIT_HIGH: float = 1.0 - PROBIT_LOW

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)
# exp(x*x/2) overflows a double beyond this magnitude.
_REFINE_LIMIT = 37.0

EPSILON: float = 1e-12


def probit(p: float) -> float:
    """
    Standard normal quantile of p.

    probit(0) is -inf and probit(1) is +inf; anything outside [0, 1]
    (or NaN) is an invalid parameter.
    """
    if math.isnan(p) or p < 0.0 or p > 1.0:
        raise InvalidParameterError("p", f"probit is defined on [0, 1], got {p!r}")
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf

    if p < PROBIT_LOW:
        q = math.sqrt(-2.0 * math.log(p))
        x = _tail(q)
    elif p <= PROBIT_HIGH:
        q = p - 0.5
        r = q * q
        x = (((((_A[0] * r + _A[1]) * r + _A[2]) * r + _A[3]) * r + _A[4]) * r + _A[5]) * q / \
            (((((_B[0] * r + _B[1]) * r + _B[2]) * r + _B[3]) * r + _B[4]) * r + 1.0)
    else:
        q = math.sqrt(-2.0 * math.log1p(-p))
        x = -_tail(q)

    if abs(x) < _REFINE_LIMIT:
        e = 0.5 * math.erfc(-x / _SQRT_2) - p
        x -= e * _SQRT_2PI * math.exp(0.5 * x * x)
    return x


def _tail(q: float) -> float:
    return (((((_C[0] * q + _C[1]) * q + _C[2]) * q + _C[3]) * q + _C[4]) * q + _C[5]) / \
        ((((_D[0] * q + _D[1]) * q + _D[2]) * q + _D[3]) * q + 1.0)


def square(x: float) -> float:
    return x * x


def are_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Tolerant float comparison."""
    return abs(a - b) <= epsilon


def is_zero(x: float, epsilon: float = EPSILON) -> bool:
    return abs(x) <= epsilon

