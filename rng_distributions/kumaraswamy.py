"""
Distribution Layer — Kumaraswamy Distribution

Closed-form inverse CDF on (0, 1): x = (1 - (1 - u)**(1/b))**(1/a) for one
exclusive uniform u. Only the median has a closed form here; mean,
variance and mode report UnsupportedOperationError.
"""

from __future__ import annotations

from typing import ClassVar, Optional, Tuple

from rng_kernel.errors import UnsupportedOperationError
from rng_kernel.generator import AbstractRandom

from .base import AbstractDistribution

DEFAULT_A: float = 2.0
DEFAULT_B: float = 2.0


def are_valid_kumaraswamy_params(a: float, b: float) -> bool:
    return a > 0.0 and b > 0.0


def sample_kumaraswamy(generator: AbstractRandom, a: float, b: float) -> float:
    u = generator.next_exclusive_double()
    return (1.0 - (1.0 - u) ** (1.0 / b)) ** (1.0 / a)


class KumaraswamyDistribution(AbstractDistribution):
    """Two-shape distribution on [0, 1]."""

    PARAMETER_NAMES: ClassVar[Tuple[str, ...]] = ("a", "b")
    DEFAULTS: ClassVar[Tuple[float, ...]] = (DEFAULT_A, DEFAULT_B)
    STEPS: ClassVar[Optional[int]] = 1

    default_validator = staticmethod(are_valid_kumaraswamy_params)
    default_sampler = staticmethod(sample_kumaraswamy)

    @property
    def a(self) -> float:
        return self._get("a")

    @a.setter
    def a(self, value: float) -> None:
        self._set("a", value)

    @property
    def b(self) -> float:
        return self._get("b")

    @b.setter
    def b(self, value: float) -> None:
        self._set("b", value)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return 1.0

    @property
    def median(self) -> float:
        return (1.0 - 2.0 ** (-1.0 / self.b)) ** (1.0 / self.a)

    @property
    def mean(self) -> float:
        raise UnsupportedOperationError("mean", "no closed form is implemented for the Kumaraswamy mean")

    @property
    def mode(self) -> Tuple[float, ...]:
        raise UnsupportedOperationError("mode", "no closed form is implemented for the Kumaraswamy mode")

    @property
    def variance(self) -> float:
        raise UnsupportedOperationError("variance", "no closed form is implemented for the Kumaraswamy variance")
