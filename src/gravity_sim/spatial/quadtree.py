"""
Quadtree implementation for Barnes-Hut gravity approximation.

The quadtree recursively subdivides 2D space into quadrants,
enabling O(n log n) approximate n-body force calculations.

Nodes live in a flat arena (``QuadTree.nodes``) and refer to their
children by index. A tree is built from empty for a single simulation
step and thrown away afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from ..types import Particle, Rect
from ..validation import InvalidParameterError, validate_capacity

# Below this distance a body or cluster contributes no force
EPSILON = 0.1

NW, NE, SW, SE = 0, 1, 2, 3


@dataclass
class QuadTreeNode:
    """
    A node in the quadtree.

    Attributes:
        boundary: Region covered by this node
        depth: Distance from the root (root is 0)
        particles: Bodies held directly by this node (leaves only)
        first_child: Arena index of the NW child, -1 for a leaf.
            Children are stored contiguously as NW, NE, SW, SE.
        total_mass: Total mass of bodies in this subtree
        center_of_mass_x/y: Center of mass of bodies in this subtree
    """

    boundary: Rect
    depth: int = 0
    particles: List[Particle] = field(default_factory=list)
    first_child: int = -1

    # Aggregated properties
    total_mass: float = 0.0
    center_of_mass_x: float = 0.0
    center_of_mass_y: float = 0.0

    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return self.first_child < 0

    def is_empty(self) -> bool:
        """True if this node contains no bodies."""
        return self.is_leaf() and not self.particles

    def children(self) -> range:
        """Arena indices of the four children (empty for a leaf)."""
        if self.first_child < 0:
            return range(0)
        return range(self.first_child, self.first_child + 4)

    def contains(self, x: float, y: float) -> bool:
        """Check if point (x, y) is within this node's region."""
        return self.boundary.contains(x, y)

    def get_quadrant(self, x: float, y: float) -> int:
        """
        Get quadrant index for a point.

        y grows downwards (screen coordinates).

        Returns:
            0=NW, 1=NE, 2=SW, 3=SE
        """
        mid_x, mid_y = self.boundary.center
        east = x >= mid_x
        south = y >= mid_y
        return (SW if south else NW) + (1 if east else 0)


class QuadTree:
    """
    Barnes-Hut quadtree for approximate gravity calculations.

    The Barnes-Hut algorithm uses a quadtree to approximate long-range
    forces. For distant clusters, the algorithm treats the cluster as
    a single body at its center of mass, reducing complexity from
    O(n^2) to O(n log n).

    Usage:
        tree = QuadTree(Rect(0, 0, 1000, 1000), capacity=4)
        for particle in particles:
            tree.insert(particle)
        tree.aggregate()

        # Accumulate gravity on a particle
        fx, fy = tree.compute_force(particle, G=6.6743e-3, theta=0.5)

    The theta parameter controls the accuracy/speed tradeoff:
    - theta = 0: Exact calculation (no approximation)
    - theta = 0.5: Good balance
    - theta = 1.0+: Fast but less accurate
    """

    def __init__(self, boundary: Rect, capacity: int = 4, max_depth: int = 48):
        """
        Initialize quadtree.

        Args:
            boundary: Region covered by the root. Must enclose every body
                that will be inserted.
            capacity: Bodies a leaf holds before it subdivides
            max_depth: Leaves at this depth never subdivide and accept any
                number of bodies (coincident bodies would otherwise split
                forever)
        """
        self.capacity = validate_capacity(capacity)
        self.max_depth = max_depth
        self.nodes: List[QuadTreeNode] = [QuadTreeNode(boundary)]
        self.particle_count = 0

    @property
    def root(self) -> QuadTreeNode:
        return self.nodes[0]

    @property
    def boundary(self) -> Rect:
        return self.nodes[0].boundary

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def insert(self, particle: Particle) -> bool:
        """
        Insert a body into the quadtree.

        Returns:
            False (and leaves the tree unchanged) if the body lies outside
            the root boundary, True otherwise.
        """
        if not self.root.contains(particle.x, particle.y):
            return False

        self._insert_into(0, particle)
        self.particle_count += 1
        return True

    def _insert_into(self, index: int, particle: Particle) -> None:
        """Descend from node `index` to the leaf that takes the body."""
        node = self.nodes[index]
        while not node.is_leaf():
            index = node.first_child + node.get_quadrant(particle.x, particle.y)
            node = self.nodes[index]

        if len(node.particles) < self.capacity or node.depth >= self.max_depth:
            node.particles.append(particle)
            return

        self.subdivide(index)
        child = node.first_child + node.get_quadrant(particle.x, particle.y)
        self._insert_into(child, particle)

    def subdivide(self, index: int) -> None:
        """
        Split leaf `index` into four equal quadrants.

        Bodies held by the leaf move into the children and the node
        becomes internal for the rest of the tree's lifetime.
        """
        node = self.nodes[index]
        if not node.is_leaf():
            return

        b = node.boundary
        hw = b.width / 2
        hh = b.height / 2
        mid_x, mid_y = b.center
        depth = node.depth + 1

        node.first_child = len(self.nodes)
        self.nodes.extend(
            [
                QuadTreeNode(Rect(b.x, b.y, hw, hh), depth),
                QuadTreeNode(Rect(mid_x, b.y, hw, hh), depth),
                QuadTreeNode(Rect(b.x, mid_y, hw, hh), depth),
                QuadTreeNode(Rect(mid_x, mid_y, hw, hh), depth),
            ]
        )

        held = node.particles
        node.particles = []
        for particle in held:
            self._insert_into(index, particle)

    # -------------------------------------------------------------------------
    # Mass distribution
    # -------------------------------------------------------------------------

    def aggregate(self) -> None:
        """Compute total mass and center of mass for all nodes (post-order)."""
        self._aggregate(0)

    def _aggregate(self, index: int) -> None:
        node = self.nodes[index]
        total_mass = 0.0
        weighted_x = 0.0
        weighted_y = 0.0

        if node.is_leaf():
            for p in node.particles:
                total_mass += p.mass
                weighted_x += p.x * p.mass
                weighted_y += p.y * p.mass
        else:
            for child_index in node.children():
                self._aggregate(child_index)
                child = self.nodes[child_index]
                total_mass += child.total_mass
                weighted_x += child.center_of_mass_x * child.total_mass
                weighted_y += child.center_of_mass_y * child.total_mass

        node.total_mass = total_mass
        if total_mass > 0:
            node.center_of_mass_x = weighted_x / total_mass
            node.center_of_mass_y = weighted_y / total_mass
        else:
            node.center_of_mass_x = 0.0
            node.center_of_mass_y = 0.0

    # -------------------------------------------------------------------------
    # Force evaluation
    # -------------------------------------------------------------------------

    def compute_force(
        self,
        particle: Particle,
        G: float,
        theta: float,
    ) -> Tuple[float, float]:
        """
        Accumulate approximate gravitational force on a body.

        Uses Barnes-Hut approximation: if a cluster is sufficiently
        far away (width/distance < theta), treat it as a single mass.
        The resulting force is applied to the body's accumulator.

        Args:
            particle: The body to calculate force on
            G: Gravitational constant
            theta: Opening angle (0 = exact pairwise summation)

        Returns:
            (fx, fy) force vector (attractive, pointing towards other mass)
        """
        fx, fy = self._compute_force(0, particle, G * particle.mass, theta)
        particle.apply_force(fx, fy)
        return fx, fy

    def _compute_force(
        self,
        index: int,
        particle: Particle,
        g_m: float,
        theta: float,
    ) -> Tuple[float, float]:
        """Recursively calculate force contribution from node `index`."""
        node = self.nodes[index]
        if node.total_mass == 0:
            return 0.0, 0.0

        if node.is_leaf():
            fx, fy = 0.0, 0.0
            for other in node.particles:
                if other is particle:
                    continue
                cfx, cfy = _point_force(particle, other.x, other.y, g_m * other.mass)
                fx += cfx
                fy += cfy
            return fx, fy

        dx = node.center_of_mass_x - particle.x
        dy = node.center_of_mass_y - particle.y
        dist = math.sqrt(dx * dx + dy * dy)

        # Barnes-Hut criterion: s/d < theta, with s the node width
        if dist >= EPSILON and node.boundary.width / dist < theta:
            force = g_m * node.total_mass / (dist * dist)
            return force * dx / dist, force * dy / dist

        # Node is too close - recurse into children
        fx, fy = 0.0, 0.0
        for child_index in node.children():
            cfx, cfy = self._compute_force(child_index, particle, g_m, theta)
            fx += cfx
            fy += cfy
        return fx, fy

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def leaves(self) -> Iterator[QuadTreeNode]:
        """Yield every leaf node in arena order."""
        for node in self.nodes:
            if node.is_leaf():
                yield node

    def boundaries(self) -> List[Rect]:
        """Boundaries of the root and every node created by subdivision."""
        return [node.boundary for node in self.nodes]

    @classmethod
    def from_particles(
        cls,
        particles: Sequence[Particle],
        margin: float = 100.0,
        capacity: int = 4,
    ) -> QuadTree:
        """
        Build quadtree over a particle list.

        Args:
            particles: Bodies to index
            margin: Padding around the bounding box of all positions
            capacity: Leaf capacity

        Returns:
            QuadTree with all bodies inserted and mass computed
        """
        if margin <= 0:
            raise InvalidParameterError(f"margin must be positive, got {margin}")

        tree = cls(Rect.bounding(particles, margin), capacity=capacity)

        for i, particle in enumerate(particles):
            if not tree.insert(particle):
                raise AssertionError(
                    f"Particle {i} at ({particle.x}, {particle.y}) lies outside "
                    f"the root boundary {tree.boundary}"
                )

        tree.aggregate()
        return tree


def _point_force(particle: Particle, x: float, y: float, g_mm: float) -> Tuple[float, float]:
    """Newtonian attraction of `particle` towards a point mass at (x, y)."""
    dx = x - particle.x
    dy = y - particle.y
    dist_sq = dx * dx + dy * dy
    dist = math.sqrt(dist_sq)

    if dist < EPSILON:
        # Skip coincident bodies
        return 0.0, 0.0

    force = g_mm / dist_sq
    return force * dx / dist, force * dy / dist


__all__ = ["EPSILON", "QuadTree", "QuadTreeNode"]
