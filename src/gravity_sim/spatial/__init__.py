"""
Spatial data structures for efficient force calculations.

Provides quadtree implementation for Barnes-Hut O(n log n) gravity approximation.
"""

from .quadtree import EPSILON, QuadTree, QuadTreeNode

__all__ = ["EPSILON", "QuadTree", "QuadTreeNode"]
