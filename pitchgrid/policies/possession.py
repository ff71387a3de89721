"""Possession contest evaluated by the shard holding the ball."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Mapping, Optional

CHALLENGE_ROLL_MAX = 10


@dataclass(frozen=True)
class ContestResult:
    """Winner of a possession contest.

    Attributes:
        winner: Player id awarded the ball, None if nobody challenged
        challenge: Winning challenge value (0 when there is no winner)
        contenders: Ids that submitted a challenge, ascending
    """
    winner: Optional[int]
    challenge: int
    contenders: tuple[int, ...] = ()


def challenge_value(dribble: int, rng: random.Random) -> int:
    """Randomized possession score, scaled by dribble skill."""
    return rng.randint(1, CHALLENGE_ROLL_MAX) * dribble


def coin_flip(rng: random.Random) -> bool:
    """Fair coin from two independent {0, 1} draws."""
    return rng.randint(0, 1) == rng.randint(0, 1)


def resolve_contest(challenges: Mapping[int, int], rng: random.Random) -> ContestResult:
    """Pick a single winner from per-player challenge values.

    Values are scanned in ascending player id. A strictly higher value
    takes the lead; an exact tie with the leader replaces it on a coin
    flip. Non-positive values mean the player did not reach the ball.

    With three or more tied values this favours the later challengers
    (the last of k ties wins with probability 1/2), so it is not a
    uniform draw across all of them.
    """
    winner: Optional[int] = None
    best = 0
    contenders = []

    for player_id in sorted(challenges):
        value = challenges[player_id]
        if value <= 0:
            continue
        contenders.append(player_id)
        if value > best:
            winner, best = player_id, value
        elif value == best and coin_flip(rng):
            winner = player_id

    return ContestResult(winner=winner, challenge=best, contenders=tuple(contenders))
