"""Core entities - Ball, Player, and supporting types.

Entities are pure data containers. Behavior is implemented in policies
and agents. A Player is owned by exactly one agent; everyone else only
ever sees a PlayerRecord copy delivered by message.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .geometry import UNASSIGNED, Point


# =============================================================================
# Enums
# =============================================================================

class Team(str, Enum):
    """Which side a player is on."""
    A = "A"
    B = "B"

    @property
    def index(self) -> int:
        return 0 if self is Team.A else 1

    @property
    def opponent(self) -> Team:
        return Team.B if self is Team.A else Team.A


# =============================================================================
# Skills
# =============================================================================

@dataclass(frozen=True)
class Skills:
    """Fixed per-match skill split.

    The three values always sum to the match skill budget and each is
    at least 1, so raising one skill costs the others.
    """
    speed: int
    dribble: int
    kick: int

    @property
    def total(self) -> int:
        return self.speed + self.dribble + self.kick

    @property
    def kick_range(self) -> int:
        return 2 * self.kick


def roll_skills(rng: random.Random, budget: int = 15, skill_max: int = 10) -> Skills:
    """Distribute a skill budget: speed first, then dribble, kick takes the rest."""
    speed = dribble = kick = 1
    remaining = budget - 3

    increment = rng.randrange(skill_max)
    speed += increment
    remaining -= increment

    increment = rng.randrange(remaining) if remaining > 0 else 0
    dribble += increment
    remaining -= increment

    kick += remaining
    return Skills(speed=speed, dribble=dribble, kick=kick)


# =============================================================================
# Per-round flags
# =============================================================================

NO_CHALLENGE = -1


@dataclass
class RoundFlags:
    """Ephemeral state derived during a single round."""
    reached_ball: bool = False
    kicked: bool = False
    challenge: int = NO_CHALLENGE

    def reset(self) -> None:
        self.reached_ball = False
        self.kicked = False
        self.challenge = NO_CHALLENGE


# =============================================================================
# Ball
# =============================================================================

@dataclass
class Ball:
    """Ball as seen by one participant. None means not held / not known here."""
    position: Optional[Point] = None

    @property
    def is_assigned(self) -> bool:
        return self.position is not None

    def revoke(self) -> None:
        self.position = None

    def place(self, position: Point) -> None:
        self.position = position


# =============================================================================
# Player
# =============================================================================

@dataclass
class Player:
    """Authoritative player state, mutated only by its own agent."""
    player_id: int
    team: Team
    skills: Skills
    prev_pos: Point = field(default_factory=lambda: Point(UNASSIGNED, UNASSIGNED))
    curr_pos: Point = field(default_factory=lambda: Point(UNASSIGNED, UNASSIGNED))
    flags: RoundFlags = field(default_factory=RoundFlags)

    def move_to(self, position: Point) -> None:
        self.prev_pos = self.curr_pos
        self.curr_pos = position

    def record(self) -> PlayerRecord:
        """Snapshot for dissemination."""
        return PlayerRecord(
            player_id=self.player_id,
            team=self.team,
            prev_pos=self.prev_pos,
            curr_pos=self.curr_pos,
            reached=self.flags.reached_ball,
            kicked=self.flags.kicked,
            challenge=self.flags.challenge,
            speed=self.skills.speed,
            dribble=self.skills.dribble,
            kick=self.skills.kick,
        )


@dataclass(frozen=True)
class PlayerRecord:
    """Routed, read-only copy of a player's state.

    This is what shards cache and what the report carries.
    """
    player_id: int
    team: Team
    prev_pos: Point
    curr_pos: Point
    reached: bool = False
    kicked: bool = False
    challenge: int = NO_CHALLENGE
    speed: int = 0
    dribble: int = 0
    kick: int = 0

    def with_position(self, prev_pos: Point, curr_pos: Point) -> PlayerRecord:
        return replace(self, prev_pos=prev_pos, curr_pos=curr_pos)

    def to_row(self) -> dict:
        """Flattened report row."""
        return {
            "player_id": self.player_id,
            "prev_x": self.prev_pos.x,
            "prev_y": self.prev_pos.y,
            "curr_x": self.curr_pos.x,
            "curr_y": self.curr_pos.y,
            "team": self.team.value,
            "reached": self.reached,
            "kicked": self.kicked,
            "challenge": self.challenge,
            "speed": self.speed,
            "dribble": self.dribble,
            "kick": self.kick,
        }
