"""
Hexagonal coordinate and pixel-space mathematics for hexhop.

This module implements every geometric operation the rules engine needs.
It supports:
- Distance calculations between hexes
- Finding adjacent hexes and rings of hexes
- Enumerating all hexes within a radius (board generation)
- Projecting hexes to pixel space and hit-testing points against them

Coordinate Systems:
-------------------
1. Axial Coordinates (q, r) - for storage and lookup
   - q: column coordinate
   - r: row coordinate
   - s = -q - r is implicit

2. Cube Coordinates (x, y, z) - for distance calculations
   - x, y, z: three coordinates with constraint x + y + z = 0
   - Conversion: x = q, z = r, y = -x - z

3. Pixel Coordinates (x, y) - where the renderer draws tile centers
   - Pointy-top hexagons, y grows downward

References:
-----------
Based on the excellent guide at: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class HexCoord:
    """
    A hexagonal coordinate using axial coordinate system.

    Attributes:
        q: Column coordinate (horizontal axis)
        r: Row coordinate (diagonal axis)

    Example:
        >>> origin = HexCoord(q=0, r=0)
        >>> neighbor = HexCoord(q=1, r=0)
        >>> hex_distance(origin, neighbor)
        1
    """

    q: int
    r: int

    @property
    def s(self) -> int:
        """Implicit third cube component."""
        return -self.q - self.r

    def __hash__(self) -> int:
        """Make HexCoord hashable for use in sets and dicts."""
        return hash((self.q, self.r))


@dataclass(frozen=True)
class Point:
    """A position in pixel space."""

    x: float
    y: float


ORIGIN = HexCoord(q=0, r=0)


def axial_to_cube(coord: HexCoord) -> tuple[int, int, int]:
    """
    Convert axial coordinates (q, r) to cube coordinates (x, y, z).

    Example:
        >>> axial_to_cube(HexCoord(q=1, r=2))
        (1, -3, 2)
    """
    x = coord.q
    z = coord.r
    y = -x - z
    return x, y, z


def cube_to_axial(x: int, y: int, z: int) -> HexCoord:  # noqa: ARG001
    """
    Convert cube coordinates (x, y, z) back to axial coordinates (q, r).

    The y parameter is accepted for symmetry with :func:`axial_to_cube`
    but is redundant (y = -x - z).
    """
    return HexCoord(q=x, r=z)


def hex_distance(a: HexCoord, b: HexCoord = ORIGIN) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps between a and b:
        distance = (|dq| + |dr| + |ds|) / 2

    When ``b`` is omitted the distance from the origin is returned, which
    is also the index of the ring the hex lies on.

    Example:
        >>> hex_distance(HexCoord(q=2, r=1))
        3
    """
    ax, ay, az = axial_to_cube(a)
    bx, by, bz = axial_to_cube(b)
    return (abs(ax - bx) + abs(ay - by) + abs(az - bz)) // 2


# Direction vectors for the 6 neighbors in axial coordinates
_NEIGHBOR_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
]

# Walking order used to trace a ring that starts at (radius, 0).
# Each side of the ring is walked ``radius`` steps in one of these directions.
RING_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 0),
    (1, -1),
)


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex.

    Example:
        >>> HexCoord(q=1, r=0) in hex_neighbors(HexCoord(q=0, r=0))
        True
    """
    return [HexCoord(q=coord.q + dq, r=coord.r + dr) for dq, dr in _NEIGHBOR_DIRECTIONS]


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    Coordinates are produced by the cube-constraint double loop: q runs from
    -n to n and, for each q, r covers exactly the values that keep
    |s| <= n. The count follows the formula 3n^2 + 3n + 1.

    Args:
        center: The center hex coordinate
        n: The maximum distance (range)

    Returns:
        A list of HexCoord objects, ordered by q then r

    Raises:
        ValueError: If n is negative

    Example:
        >>> len(hexes_in_range(HexCoord(q=0, r=0), n=1))
        7
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    hexes = []
    for dq in range(-n, n + 1):
        for dr in range(max(-n, -dq - n), min(n, -dq + n) + 1):
            hexes.append(HexCoord(q=center.q + dq, r=center.r + dr))
    return hexes


def hex_ring(center: HexCoord, radius: int) -> list[HexCoord]:
    """
    Return the hexes at exactly ``radius`` from ``center`` in ring order.

    The walk starts at ``center + (radius, 0)`` and follows
    :data:`RING_DIRECTIONS`; this fixed order is the ring traversal
    direction used everywhere in the engine. Consecutive entries are
    neighbours and the last entry neighbours the first.

    Raises:
        ValueError: If radius is negative
    """
    if radius < 0:
        msg = f"Ring radius must be non-negative, got {radius}"
        raise ValueError(msg)
    if radius == 0:
        return [center]

    q, r = center.q + radius, center.r
    ring: list[HexCoord] = []
    for dq, dr in RING_DIRECTIONS:
        for _ in range(radius):
            ring.append(HexCoord(q=q, r=r))
            q += dq
            r += dr
    return ring


# --- Pixel space ---------------------------------------------------------------

SQRT3 = math.sqrt(3)

# Slack applied to the circumscribed circle before the exact polygon test
CIRCLE_REJECT_FACTOR = 1.05


def axial_to_pixel(coord: HexCoord, size: float, origin: Point = Point(0.0, 0.0)) -> Point:
    """
    Project an axial coordinate to the pixel center of its hexagon.

        x = size * sqrt(3) * (q + r / 2)
        y = size * 1.5 * r
    """
    x = size * SQRT3 * (coord.q + coord.r / 2) + origin.x
    y = size * 1.5 * coord.r + origin.y
    return Point(x, y)


def hex_vertices(center: Point, size: float) -> list[Point]:
    """Return the six vertices of a pointy-top hexagon, starting straight up."""
    vertices = []
    for i in range(6):
        angle = -math.pi / 2 + i * (math.pi / 3)
        vertices.append(Point(center.x + size * math.cos(angle), center.y + size * math.sin(angle)))
    return vertices


def point_in_polygon(polygon: Sequence[Point], p: Point) -> bool:
    """Ray-casting point-in-polygon test."""
    inside = False
    j = len(polygon) - 1
    for i, vi in enumerate(polygon):
        vj = polygon[j]
        crosses = (vi.y > p.y) != (vj.y > p.y)
        if crosses and p.x < (vj.x - vi.x) * (p.y - vi.y) / (vj.y - vi.y + 1e-12) + vi.x:
            inside = not inside
        j = i
    return inside


def point_in_hex(center: Point, size: float, p: Point) -> bool:
    """
    Check whether ``p`` lies inside the hexagon of ``size`` centered at ``center``.

    A circumscribed-circle check rejects far points before the exact
    polygon test runs.
    """
    dx = p.x - center.x
    dy = p.y - center.y
    reject_radius = size * CIRCLE_REJECT_FACTOR
    if dx * dx + dy * dy > reject_radius * reject_radius:
        return False
    return point_in_polygon(hex_vertices(center, size), p)


def pixel_distance(a: Point, b: Point) -> float:
    """Euclidean distance between two pixel points."""
    return math.hypot(a.x - b.x, a.y - b.y)
