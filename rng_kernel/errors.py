"""
RNG Kernel — Exception Hierarchy v1.0

All failures are local, synchronous and structural. Nothing is retried.
"""

from __future__ import annotations


class RandomError(Exception):
    """Base exception for all generator and distribution failures."""


class InvalidParameterError(RandomError, ValueError):
    """Raised when a parameter (or joint parameter tuple) is out of range."""

    def __init__(self, parameter: str, detail: str) -> None:
        self.parameter = parameter
        self.detail = detail
        super().__init__(f"[PARAM:{parameter}] {detail}")


class UnsupportedOperationError(RandomError, NotImplementedError):
    """Raised when a generator or distribution does not implement an operation."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail or f"{operation} is not supported"
        super().__init__(f"[UNSUPPORTED:{operation}] {self.detail}")


class UndefinedStatisticError(UnsupportedOperationError):
    """
    Raised when a statistic exists for the distribution in general but is
    undefined for the current parameter values.
    """


class SerializationError(RandomError):
    """Base exception for state text encoding / decoding."""


class MalformedStateError(SerializationError, ValueError):
    """Raised when serialized state text has a bad shape, tag or payload."""


class UnknownTagError(SerializationError, LookupError):
    """Raised when no prototype is registered for a serialized tag."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"No generator registered for tag {tag!r}")
