"""
Distribution Layer — Abstract Distribution v1.0

A distribution holds a reference to (never ownership of) a generator plus
a tuple of named parameters. Two strategies are injected per instance:

  validator(*params) -> bool                   joint validity predicate
  sampler(generator, *params) -> float         one distributed value

Both default to the subclass's standard algorithm. Parameters are always
jointly valid: every assignment re-checks the whole tuple and leaves the
instance untouched when the check fails.
"""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, List, Optional, Tuple

from rng_kernel.errors import InvalidParameterError, UnsupportedOperationError
from rng_kernel.generator import AbstractRandom

Validator = Callable[..., bool]
Sampler = Callable[..., float]


class AbstractDistribution:
    """Base for continuous distributions drawing from an AbstractRandom."""

    PARAMETER_NAMES: ClassVar[Tuple[str, ...]] = ()
    DEFAULTS: ClassVar[Tuple[float, ...]] = ()
    # Generator steps one default sample consumes; None when it varies.
    STEPS: ClassVar[Optional[int]] = None

    def __init__(
        self,
        generator: AbstractRandom,
        *params: float,
        validator: Optional[Validator] = None,
        sampler: Optional[Sampler] = None,
    ) -> None:
        if not isinstance(generator, AbstractRandom):
            raise InvalidParameterError(
                "generator", f"expected AbstractRandom, got {type(generator).__name__}"
            )
        if not params:
            params = self.DEFAULTS
        if len(params) != len(self.PARAMETER_NAMES):
            raise InvalidParameterError(
                "/".join(self.PARAMETER_NAMES),
                f"{type(self).__name__} takes {len(self.PARAMETER_NAMES)} parameters, got {len(params)}",
            )
        self._generator = generator
        self._validator: Validator = validator or type(self).default_validator
        self._sampler: Sampler = sampler or type(self).default_sampler
        self._check(tuple(params), "/".join(self.PARAMETER_NAMES))
        self._params: Tuple[float, ...] = tuple(params)

    # -- Default strategies (overridden per subclass) -----------------------

    @staticmethod
    def default_validator(*params: float) -> bool:
        raise NotImplementedError

    @staticmethod
    def default_sampler(generator: AbstractRandom, *params: float) -> float:
        raise NotImplementedError

    # -- Strategy injection -------------------------------------------------

    @property
    def validator(self) -> Validator:
        return self._validator

    def set_validator(self, validator: Validator) -> None:
        """Replace the validity predicate; current parameters must satisfy it."""
        if not validator(*self._params):
            raise InvalidParameterError(
                "/".join(self.PARAMETER_NAMES),
                f"current parameters {self._params} fail the new validator",
            )
        self._validator = validator

    @property
    def sampler(self) -> Sampler:
        return self._sampler

    def set_sampler(self, sampler: Sampler) -> None:
        self._sampler = sampler

    # -- Parameters ---------------------------------------------------------

    @property
    def generator(self) -> AbstractRandom:
        return self._generator

    @property
    def parameters(self) -> Dict[str, float]:
        return dict(zip(self.PARAMETER_NAMES, self._params))

    @property
    def parameter_count(self) -> int:
        return len(self.PARAMETER_NAMES)

    @property
    def steps(self) -> Optional[int]:
        """
        Uniform draws the default sampler takes per value, or None for
        rejection samplers. An injected sampler is not accounted for.
        """
        return self.STEPS

    def parameter_name(self, index: int) -> str:
        """Name of the parameter at index, or "" for an unknown index."""
        if 0 <= index < len(self.PARAMETER_NAMES):
            return self.PARAMETER_NAMES[index]
        return ""

    def parameter_value(self, index: int) -> float:
        if not 0 <= index < len(self.PARAMETER_NAMES):
            raise UnsupportedOperationError(
                "parameter_value", f"{type(self).__name__} has no parameter {index}"
            )
        return self._params[index]

    def set_parameter_value(self, index: int, value: float) -> None:
        if not 0 <= index < len(self.PARAMETER_NAMES):
            raise UnsupportedOperationError(
                "set_parameter_value", f"{type(self).__name__} has no parameter {index}"
            )
        self._assign(index, value)

    def is_valid_parameter(self, name: str, value: float) -> bool:
        """Would assigning value to name keep the parameter tuple valid?"""
        index = self.PARAMETER_NAMES.index(name)
        candidate = self._params[:index] + (value,) + self._params[index + 1:]
        return bool(self._validator(*candidate))

    def _get(self, name: str) -> float:
        return self._params[self.PARAMETER_NAMES.index(name)]

    def _set(self, name: str, value: float) -> None:
        self._assign(self.PARAMETER_NAMES.index(name), value)

    def _assign(self, index: int, value: float) -> None:
        candidate = self._params[:index] + (value,) + self._params[index + 1:]
        self._check(candidate, self.PARAMETER_NAMES[index])
        self._params = candidate

    def _check(self, params: Tuple[float, ...], name: str) -> None:
        if not self._validator(*params):
            joined = ", ".join(f"{n}={v!r}" for n, v in zip(self.PARAMETER_NAMES, params))
            raise InvalidParameterError(
                name, f"invalid parameters for {type(self).__name__}: {joined}"
            )

    # -- Sampling -----------------------------------------------------------

    def next_double(self) -> float:
        return self._sampler(self._generator, *self._params)

    def next_doubles(self, count: int) -> List[float]:
        if count < 0:
            raise InvalidParameterError("count", f"must be non-negative, got {count}")
        return [self.next_double() for _ in range(count)]

    # -- Statistics ---------------------------------------------------------

    @property
    def minimum(self) -> float:
        raise UnsupportedOperationError("minimum")

    @property
    def maximum(self) -> float:
        raise UnsupportedOperationError("maximum")

    @property
    def mean(self) -> float:
        raise UnsupportedOperationError("mean")

    @property
    def median(self) -> float:
        raise UnsupportedOperationError("median")

    @property
    def mode(self) -> Tuple[float, ...]:
        raise UnsupportedOperationError("mode")

    @property
    def variance(self) -> float:
        raise UnsupportedOperationError("variance")

    def __repr__(self) -> str:
        joined = ", ".join(f"{n}={v!r}" for n, v in zip(self.PARAMETER_NAMES, self._params))
        return f"{type(self).__name__}({joined})"
