"""
CLI commands for pydecenttree.

Provides the command-line interface for building trees from distance
matrix files.
"""

__all__ = ["main", "tree"]
