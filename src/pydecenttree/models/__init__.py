"""Configuration models for pydecenttree."""

from pydecenttree.models.config import ConstructionOptions

__all__ = ["ConstructionOptions"]
