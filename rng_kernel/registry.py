"""
RNG Kernel — Generator Registry v1.0

Maps a tag to a prototype generator used only as a factory. Nothing is
registered implicitly: call register_builtin_generators() once at startup
on a registry object you own and pass that registry where it is needed.

Re-registering a tag replaces the prototype (last write wins).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .distinct import DistinctRandom
from .errors import UnknownTagError
from .generator import AbstractRandom
from .serialization import parse_tag, validate_tag
from .tricycle import TricycleRandom

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Tag → prototype lookup. Not thread-safe while being populated."""

    def __init__(self) -> None:
        self._prototypes: Dict[str, AbstractRandom] = {}

    # -- Registration -------------------------------------------------------

    def register(self, prototype: AbstractRandom) -> Optional[AbstractRandom]:
        """
        Register prototype under its own tag.
        Returns the prototype it replaced, or None.
        """
        tag = prototype.tag
        validate_tag(tag)
        previous = self._prototypes.get(tag)
        self._prototypes[tag] = prototype.copy()
        if previous is not None:
            logger.debug("Replaced prototype for tag %r with %s", tag, type(prototype).__name__)
        else:
            logger.debug("Registered %s under tag %r", type(prototype).__name__, tag)
        return previous

    def unregister(self, tag: str) -> AbstractRandom:
        try:
            return self._prototypes.pop(tag)
        except KeyError:
            raise UnknownTagError(tag) from None

    # -- Lookup -------------------------------------------------------------

    def get(self, tag: str) -> AbstractRandom:
        """A fresh copy of the prototype registered for tag."""
        prototype = self._prototypes.get(tag)
        if prototype is None:
            raise UnknownTagError(tag)
        return prototype.copy()

    def create(self, tag: str, seed: Optional[int] = None) -> AbstractRandom:
        """New generator of the tagged type, seeded (or from OS entropy if seed is None)."""
        generator = self.get(tag)
        return type(generator)(seed)

    def deserialize(self, data: str) -> AbstractRandom:
        """Rebuild a generator of the right concrete type from serialized text."""
        tag = parse_tag(data)
        generator = self.get(tag)
        return generator.string_deserialize(data)

    def tags(self) -> List[str]:
        return sorted(self._prototypes)

    def __contains__(self, tag: object) -> bool:
        return tag in self._prototypes

    def __len__(self) -> int:
        return len(self._prototypes)


def register_builtin_generators(registry: GeneratorRegistry) -> GeneratorRegistry:
    """Register every generator shipped with the kernel. Returns the registry."""
    registry.register(TricycleRandom.from_state(1, 1, 1))
    registry.register(DistinctRandom.from_state(1))
    return registry
