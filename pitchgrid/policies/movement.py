"""Player movement toward the ball.

A player either snaps onto the ball when it is within reach this round,
or spends exactly ``speed`` cells split randomly between the two axes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from pitchgrid.core.geometry import Point, clamp_to_field, direction_toward, in_range

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one movement step.

    Attributes:
        position: Where the player ends up (clamped to the pitch)
        reached_ball: Player snapped onto the ball this round
        unclamped: Target before clamping, for displacement checks
    """
    position: Point
    reached_ball: bool
    unclamped: Point


def split_budget(budget: int, rng: random.Random) -> tuple[int, int]:
    """Uniformly split a travel budget into (horizontal, vertical) parts."""
    horizontal = rng.randint(0, budget)
    return horizontal, budget - horizontal


def plan_move(
    position: Point,
    ball: Optional[Point],
    speed: int,
    config: MatchConfig,
    rng: random.Random,
) -> MoveResult:
    """Move a player toward the last known ball position."""
    if ball is None:
        return MoveResult(position=position, reached_ball=False, unclamped=position)

    if in_range(ball, position, speed):
        return MoveResult(position=ball, reached_ball=True, unclamped=ball)

    x_dir = direction_toward(position.x, ball.x)
    y_dir = direction_toward(position.y, ball.y)
    horizontal, vertical = split_budget(speed, rng)
    unclamped = Point(position.x + horizontal * x_dir, position.y + vertical * y_dir)

    return MoveResult(
        position=clamp_to_field(unclamped, config),
        reached_ball=False,
        unclamped=unclamped,
    )
