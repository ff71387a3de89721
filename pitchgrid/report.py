"""Per-round report assembled at shard 0 after the round barrier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pitchgrid.core.entities import PlayerRecord, Team
from pitchgrid.core.geometry import Point
from pitchgrid.policies.kick import KickKind


@dataclass(frozen=True)
class RoundReport:
    """Consistent world snapshot for one round.

    Attributes:
        round_index: Round this snapshot closes
        ball: Ball position held by the owning shard (None mid-transition)
        ball_owners: Shard ids that reported holding the ball
        players: Cached records of every on-pitch player, ascending id
        kicker: Player that won possession, if any
        kick_kind: Rule that resolved the kick, if any
        pass_target: Receiving teammate when the kick was a pass
        goal: Team credited with a goal this round, if any
        score_a: Team A goals so far
        score_b: Team B goals so far
    """
    round_index: int
    ball: Optional[Point]
    ball_owners: tuple[int, ...]
    players: tuple[PlayerRecord, ...]
    kicker: Optional[int] = None
    kick_kind: Optional[KickKind] = None
    pass_target: Optional[int] = None
    goal: Optional[Team] = None
    score_a: int = 0
    score_b: int = 0

    @property
    def kicked_players(self) -> tuple[int, ...]:
        return tuple(record.player_id for record in self.players if record.kicked)

    @property
    def reached_players(self) -> tuple[int, ...]:
        return tuple(record.player_id for record in self.players if record.reached)

    def player(self, player_id: int) -> Optional[PlayerRecord]:
        for record in self.players:
            if record.player_id == player_id:
                return record
        return None

    def to_rows(self) -> list[dict]:
        """Flattened per-player rows for external sinks."""
        return [record.to_row() for record in self.players]

    def to_dict(self) -> dict:
        return {
            "round": self.round_index,
            "ball": self.ball.as_tuple() if self.ball else None,
            "ball_owners": list(self.ball_owners),
            "kicker": self.kicker,
            "kick_kind": self.kick_kind.value if self.kick_kind else None,
            "pass_target": self.pass_target,
            "goal": self.goal.value if self.goal else None,
            "score": {"A": self.score_a, "B": self.score_b},
            "players": self.to_rows(),
        }
