"""
Name-keyed registry of tree-construction algorithms.

Algorithms register themselves at import time with :func:`register_algorithm`.
After that the registry is only read: lookups of unknown names return None
instead of raising, so callers can report a normal error message.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydecenttree.algorithms.base import TreeBuilder

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Mapping from algorithm name to TreeBuilder class.

    Example:
        >>> registry = AlgorithmRegistry()
        >>> registry.register(NeighborJoining)
        >>> builder = registry.get_tree_builder_by_name("NJ")
    """

    def __init__(self) -> None:
        self._builders: dict[str, type[TreeBuilder]] = {}

    def register(self, builder_class: type[TreeBuilder]) -> type[TreeBuilder]:
        """Register a TreeBuilder subclass under its ``name``.

        Raises:
            ValueError: If the name is empty or already registered.
        """
        name = getattr(builder_class, "name", "")
        if not name:
            raise ValueError(f"{builder_class.__name__} does not define a name")
        if name in self._builders:
            raise ValueError(f"Algorithm {name} is already registered")
        self._builders[name] = builder_class
        logger.debug("Registered tree builder %s", name)
        return builder_class

    def get_tree_builder_by_name(self, name: str) -> TreeBuilder | None:
        """Return a new builder instance for ``name``, or None if unknown."""
        builder_class = self._builders.get(name)
        if builder_class is None:
            return None
        return builder_class()

    def names(self) -> list[str]:
        return sorted(self._builders)

    def descriptions(self) -> dict[str, str]:
        return {name: self._builders[name].description for name in self.names()}

    def __contains__(self, name: object) -> bool:
        return name in self._builders

    def __len__(self) -> int:
        return len(self._builders)


default_registry = AlgorithmRegistry()


def register_algorithm(builder_class: type[TreeBuilder]) -> type[TreeBuilder]:
    """Class decorator registering a builder in the default registry."""
    return default_registry.register(builder_class)
