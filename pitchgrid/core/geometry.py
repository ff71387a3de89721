"""Pitch geometry and shard routing.

Pure, total functions. Every shard evaluates these on the same broadcast
values and must reach the same answer, so nothing here reads or writes
state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig


# Coordinate value meaning "not known / not held here"
UNASSIGNED = -1


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable grid coordinate."""
    x: int = 0
    y: int = 0

    @property
    def is_assigned(self) -> bool:
        return self.x != UNASSIGNED and self.y != UNASSIGNED

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class ShardBounds:
    """Half-open rectangle [x_min, x_max) x [y_min, y_max) owned by one shard."""
    shard_id: int
    x_min: int
    y_min: int
    x_max: int
    y_max: int

    def contains(self, point: Point) -> bool:
        return self.x_min <= point.x < self.x_max and self.y_min <= point.y < self.y_max

    @property
    def area(self) -> int:
        return (self.x_max - self.x_min) * (self.y_max - self.y_min)


# =============================================================================
# Routing
# =============================================================================

def shard_of(x: int, y: int, config: MatchConfig) -> Optional[int]:
    """Shard id whose bounds contain (x, y).

    Returns None when either coordinate is UNASSIGNED or the point lies
    off the pitch. Shards are linearized column first: ``col + row * columns``.
    """
    if x == UNASSIGNED or y == UNASSIGNED:
        return None
    if not in_bounds(Point(x, y), config):
        return None
    row = y // config.shard_width
    col = x // config.shard_length
    return col + row * config.shard_columns


def shard_of_point(point: Optional[Point], config: MatchConfig) -> Optional[int]:
    """shard_of for an optional Point."""
    if point is None:
        return None
    return shard_of(point.x, point.y, config)


def shard_bounds(shard_id: int, config: MatchConfig) -> ShardBounds:
    """Rectangle owned by a shard."""
    if not 0 <= shard_id < config.shard_count:
        raise ValueError(f"no shard {shard_id} in a {config.shard_count}-shard grid")
    row, col = divmod(shard_id, config.shard_columns)
    x_min = col * config.shard_length
    y_min = row * config.shard_width
    return ShardBounds(
        shard_id=shard_id,
        x_min=x_min,
        y_min=y_min,
        x_max=x_min + config.shard_length,
        y_max=y_min + config.shard_width,
    )


# =============================================================================
# Distances
# =============================================================================

def distance(p1: Point, p2: Point) -> int:
    """Manhattan distance."""
    return abs(p1.x - p2.x) + abs(p1.y - p2.y)


def in_range(p1: Point, p2: Point, d: int) -> bool:
    return distance(p1, p2) <= d


def in_bounds(point: Point, config: MatchConfig) -> bool:
    return 0 <= point.x < config.field_length and 0 <= point.y < config.field_width


def clamp_to_field(point: Point, config: MatchConfig) -> Point:
    """Clamp a position to the last valid cell on each axis."""
    x = max(0, min(config.field_length - 1, point.x))
    y = max(0, min(config.field_width - 1, point.y))
    return Point(x, y)


def direction_toward(origin: int, target: int) -> int:
    """+1 or -1 along one axis; a zero delta resolves toward the positive axis."""
    return 1 if target - origin >= 0 else -1
