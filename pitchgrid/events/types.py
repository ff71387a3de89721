"""Event types emitted while a match runs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pitchgrid.core.entities import Team

if TYPE_CHECKING:
    from pitchgrid.report import RoundReport


@dataclass
class MatchEvent:
    """Base class for all match events."""

    timestamp: datetime = field(default_factory=datetime.now)
    match_id: Optional[str] = None

    # Match context at time of event
    round_index: int = 0
    score_a: int = 0
    score_b: int = 0


@dataclass
class RoundCompletedEvent(MatchEvent):
    """Fired for every aggregated round."""

    report: "RoundReport" = None


@dataclass
class PossessionEvent(MatchEvent):
    """Fired when a player wins the possession contest."""

    player_id: int = -1
    team: Team = Team.A
    challenge: int = 0
    kick_kind: str = ""  # "score", "pass", "advance", "reset"
    target_id: Optional[int] = None  # Receiving teammate on a pass


@dataclass
class GoalEvent(MatchEvent):
    """Fired when a kick scores."""

    team: Team = Team.A
    scorer_id: Optional[int] = None


@dataclass
class HalfTimeEvent(MatchEvent):
    """Fired once, with the first report at or after the end of the first half."""


@dataclass
class MatchEndEvent(MatchEvent):
    """Fired after the last round."""

    winner: Optional[Team] = None  # None if drawn
    rounds_played: int = 0
