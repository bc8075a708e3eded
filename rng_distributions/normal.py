"""
Distribution Layer — Normal Distribution

Inverse-CDF sampling: one exclusive uniform draw through probit(), scaled
by sigma and shifted by mu. Also the standard-normal building block used
by the Gamma sampler.
"""

from __future__ import annotations

import math
from typing import ClassVar, Optional, Tuple

from rng_kernel.generator import AbstractRandom
from rng_kernel.math_utils import probit, square

from .base import AbstractDistribution

DEFAULT_MU: float = 1.0
DEFAULT_SIGMA: float = 1.0


def are_valid_normal_params(mu: float, sigma: float) -> bool:
    """mu is any non-NaN number, sigma strictly positive."""
    return not math.isnan(mu) and sigma > 0.0


def sample_normal(generator: AbstractRandom, mu: float, sigma: float) -> float:
    return probit(generator.next_exclusive_double()) * sigma + mu


class NormalDistribution(AbstractDistribution):
    """Gaussian with location mu and scale sigma."""

    PARAMETER_NAMES: ClassVar[Tuple[str, ...]] = ("mu", "sigma")
    DEFAULTS: ClassVar[Tuple[float, ...]] = (DEFAULT_MU, DEFAULT_SIGMA)
    STEPS: ClassVar[Optional[int]] = 1

    default_validator = staticmethod(are_valid_normal_params)
    default_sampler = staticmethod(sample_normal)

    @property
    def mu(self) -> float:
        return self._get("mu")

    @mu.setter
    def mu(self, value: float) -> None:
        self._set("mu", value)

    @property
    def sigma(self) -> float:
        return self._get("sigma")

    @sigma.setter
    def sigma(self, value: float) -> None:
        self._set("sigma", value)

    @property
    def minimum(self) -> float:
        return -math.inf

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def median(self) -> float:
        return self.mu

    @property
    def mode(self) -> Tuple[float, ...]:
        return (self.mu,)

    @property
    def variance(self) -> float:
        return square(self.sigma)
