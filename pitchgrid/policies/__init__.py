"""Per-round decision policies: movement, possession contest, kick."""

from .kick import (
    KickDecision,
    KickKind,
    attacks_right,
    goal_posts,
    resolve_kick,
    scoring_direction,
)
from .movement import MoveResult, plan_move, split_budget
from .possession import ContestResult, challenge_value, coin_flip, resolve_contest

__all__ = [
    "ContestResult",
    "KickDecision",
    "KickKind",
    "MoveResult",
    "attacks_right",
    "challenge_value",
    "coin_flip",
    "goal_posts",
    "plan_move",
    "resolve_contest",
    "resolve_kick",
    "scoring_direction",
    "split_budget",
]
