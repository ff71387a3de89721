"""Round-tagged messages exchanged between participants.

Every cross-participant read is one of these. Payloads are frozen so a
delivered message can never be used to reach back into the sender's
state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pitchgrid.core.entities import PlayerRecord, Team
from pitchgrid.core.geometry import Point
from pitchgrid.core.phases import RoundPhase
from pitchgrid.policies.kick import KickKind


@dataclass(frozen=True)
class Message:
    """Envelope for a payload.

    Attributes:
        round_index: Round the payload belongs to (-1 for kickoff)
        phase: Phase that produced the payload
        source: Sending participant id
        payload: One of the payload types below
    """
    round_index: int
    phase: RoundPhase
    source: int
    payload: Any


# =============================================================================
# Payloads
# =============================================================================

@dataclass(frozen=True)
class BallPosition:
    """Shard → players. None when this shard does not hold the ball."""
    position: Optional[Point]


@dataclass(frozen=True)
class PlayerUpdate:
    """Player → shards (and teammates). Latest record of the sender."""
    record: PlayerRecord


@dataclass(frozen=True)
class Challenge:
    """Player → shards. Value is NO_CHALLENGE when the ball was not reached."""
    value: int


@dataclass(frozen=True)
class PossessionVerdict:
    """Shard → players. Only the shard holding the ball has a say."""
    owns_ball: bool
    winner: Optional[int] = None
    challenge: int = 0


@dataclass(frozen=True)
class KickOutcome:
    """Player → shards. Non-kickers send an empty outcome."""
    kicked: bool
    ball: Optional[Point] = None
    team: Optional[Team] = None
    kind: Optional[KickKind] = None
    target_id: Optional[int] = None

    @property
    def is_goal(self) -> bool:
        return self.kind == KickKind.SCORE


@dataclass(frozen=True)
class ShardSnapshot:
    """Shard → shard 0. Everything a shard holds after the round barrier."""
    ball: Optional[Point]
    players: tuple[PlayerRecord, ...]
