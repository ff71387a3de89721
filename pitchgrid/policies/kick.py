"""Kick resolution for the player that won possession.

Decision tree, first matching rule wins:
    1. SCORE   - a post of the attacking goal is within kick range of the ball
    2. PASS    - first teammate (ascending id) within kick range of the kicker
                 that is strictly nearer the goal than the kicker
    3. ADVANCE - kick range split randomly between the axes toward goal;
                 a kick that leaves the pitch is reset to the centre spot
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping, Optional

from pitchgrid.core.entities import Team
from pitchgrid.core.geometry import Point, direction_toward, distance, in_bounds, in_range

from .movement import split_budget

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig


class KickKind(str, Enum):
    """Which rule resolved the kick."""
    SCORE = "score"
    PASS = "pass"
    ADVANCE = "advance"
    RESET = "reset"      # Advance that left the pitch


@dataclass(frozen=True)
class KickDecision:
    """Where the ball goes and why."""
    kind: KickKind
    ball: Point
    target_id: Optional[int] = None

    @property
    def is_goal(self) -> bool:
        return self.kind == KickKind.SCORE


# =============================================================================
# Attacking direction
# =============================================================================

def attacks_right(team: Team, round_index: int, config: MatchConfig) -> bool:
    """Team A attacks the right goal in the first half, team B in the second."""
    first_half = round_index < config.half_time_round
    return (team is Team.A) == first_half


def scoring_direction(team: Team, round_index: int, config: MatchConfig) -> int:
    """+1 when attacking toward increasing x, else -1."""
    return 1 if attacks_right(team, round_index, config) else -1


def goal_posts(team: Team, round_index: int, config: MatchConfig) -> tuple[Point, Point]:
    """Both posts of the goal this team is attacking."""
    x = config.right_goal_x if attacks_right(team, round_index, config) else config.left_goal_x
    return Point(x, config.goal_post_low), Point(x, config.goal_post_high)


def distance_to_goal(position: Point, posts: tuple[Point, Point]) -> int:
    """Distance to the nearer post."""
    return min(distance(position, post) for post in posts)


# =============================================================================
# Resolution
# =============================================================================

def resolve_kick(
    kicker_id: int,
    kicker: Point,
    kick: int,
    team: Team,
    ball: Point,
    teammates: Mapping[int, Point],
    round_index: int,
    config: MatchConfig,
    rng: random.Random,
) -> KickDecision:
    """Decide the ball's next position.

    Args:
        kicker_id: Id of the kicking player (skipped among teammates)
        kicker: Kicker's current position
        kick: Kicker's kick skill; kick range is twice this
        team: Kicker's team
        ball: Ball position before the kick
        teammates: Positions of the kicker's teammates by player id
        round_index: Current round, selects the half
        config: Match constants
        rng: Kicker's random source
    """
    kick_range = 2 * kick
    posts = goal_posts(team, round_index, config)

    if any(in_range(post, ball, kick_range) for post in posts):
        return KickDecision(kind=KickKind.SCORE, ball=config.center)

    own_distance = distance_to_goal(kicker, posts)
    for player_id in sorted(teammates):
        if player_id == kicker_id:
            continue
        mate = teammates[player_id]
        if in_range(mate, kicker, kick_range) and distance_to_goal(mate, posts) < own_distance:
            return KickDecision(kind=KickKind.PASS, ball=mate, target_id=player_id)

    x_dir = scoring_direction(team, round_index, config)
    goal_row = (config.goal_post_low + config.goal_post_high) // 2
    y_dir = direction_toward(kicker.y, goal_row)
    horizontal, vertical = split_budget(kick_range, rng)
    landing = Point(kicker.x + horizontal * x_dir, kicker.y + vertical * y_dir)

    if not in_bounds(landing, config):
        return KickDecision(kind=KickKind.RESET, ball=config.center)
    return KickDecision(kind=KickKind.ADVANCE, ball=landing)
