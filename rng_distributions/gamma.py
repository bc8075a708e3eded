"""
Distribution Layer — Gamma Distribution

Shape alpha, rate beta. Sampling follows Marsaglia & Tsang (2000),
"A Simple Method for Generating Gamma Variables":

  1. alpha < 1 is boosted to alpha + 1 and corrected at the end with
     u ** (1 / alpha) (Ahrens-Dieter).
  2. d = alpha - 1/3, c = 1 / sqrt(9 d).
  3. Draw standard normal x until v = (1 + c x) > 0; cube v.
  4. Accept when u <= 1 - 0.331 x**4 (squeeze, no log), or when
     ln u <= x**2 / 2 + d (1 - v + ln v).
"""

from __future__ import annotations

import math
from typing import ClassVar, Tuple

from rng_kernel.errors import UndefinedStatisticError, UnsupportedOperationError
from rng_kernel.generator import AbstractRandom
from rng_kernel.math_utils import are_equal, is_zero, square

from .base import AbstractDistribution
from .normal import sample_normal

DEFAULT_ALPHA: float = 1.0
DEFAULT_BETA: float = 1.0

_SQUEEZE: float = 0.331


def are_valid_gamma_params(alpha: float, beta: float) -> bool:
    return alpha > 0.0 and beta > 0.0


def sample_gamma(generator: AbstractRandom, alpha: float, beta: float) -> float:
    original_alpha = alpha
    if alpha < 1.0:
        alpha += 1.0

    d = alpha - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)

    while True:
        while True:
            x = sample_normal(generator, 0.0, 1.0)
            v = 1.0 + c * x
            if v > 0.0:
                break
        v = v * v * v
        u = generator.next_double()
        x2 = square(x)
        if u <= 1.0 - _SQUEEZE * square(x2):
            break
        log_u = math.log(u) if u > 0.0 else -math.inf
        if log_u <= 0.5 * x2 + d * (1.0 - v + math.log(v)):
            break

    if are_equal(alpha, original_alpha):
        return d * v / beta

    u = generator.next_double()
    while is_zero(u):
        u = generator.next_double()
    return math.pow(u, 1.0 / original_alpha) * d * v / beta


class GammaDistribution(AbstractDistribution):
    """Gamma with shape alpha and rate beta; support [0, inf)."""

    PARAMETER_NAMES: ClassVar[Tuple[str, ...]] = ("alpha", "beta")
    DEFAULTS: ClassVar[Tuple[float, ...]] = (DEFAULT_ALPHA, DEFAULT_BETA)

    default_validator = staticmethod(are_valid_gamma_params)
    default_sampler = staticmethod(sample_gamma)

    @property
    def alpha(self) -> float:
        return self._get("alpha")

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._set("alpha", value)

    @property
    def beta(self) -> float:
        return self._get("beta")

    @beta.setter
    def beta(self, value: float) -> None:
        self._set("beta", value)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self.alpha / self.beta

    @property
    def median(self) -> float:
        raise UnsupportedOperationError(
            "median", "the Gamma median has no closed form"
        )

    @property
    def mode(self) -> Tuple[float, ...]:
        if self.alpha >= 1.0:
            return ((self.alpha - 1.0) / self.beta,)
        raise UndefinedStatisticError(
            "mode", f"the Gamma mode is undefined for alpha < 1 (alpha={self.alpha!r})"
        )

    @property
    def variance(self) -> float:
        return self.alpha / self.beta / self.beta
