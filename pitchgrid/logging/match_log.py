"""In-memory match log for accumulating round-by-round events."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pitchgrid.core.entities import PlayerRecord, Team
from pitchgrid.core.geometry import distance
from pitchgrid.events import (
    EventBus,
    GoalEvent,
    HalfTimeEvent,
    MatchEndEvent,
    PossessionEvent,
    RoundCompletedEvent,
)


@dataclass
class LogEntry:
    """Single entry in the match log."""

    timestamp: datetime
    round_index: int
    event_type: str  # "POSSESSION", "GOAL", "HALF_TIME", "FULL_TIME"
    description: str
    score_a: int
    score_b: int
    player_id: Optional[int] = None


@dataclass
class ScoringPlay:
    """Record of a goal."""

    round_index: int
    team: Team
    scorer_id: Optional[int]
    score_a_after: int
    score_b_after: int


@dataclass
class PlayerStats:
    """Accumulated statistics for one player."""

    player_id: int
    team: Team
    speed: int = 0
    dribble: int = 0
    kick: int = 0

    distance: int = 0
    reaches: int = 0
    possessions: int = 0
    passes: int = 0
    passes_received: int = 0
    advances: int = 0
    goals: int = 0

    @property
    def conversion_rate(self) -> float:
        """Share of reached balls that were won."""
        if self.reaches == 0:
            return 0.0
        return self.possessions / self.reaches


@dataclass
class TeamStats:
    """Accumulated statistics for one team."""

    goals: int = 0
    possessions: int = 0
    passes: int = 0
    advances: int = 0
    resets: int = 0


class MatchLog:
    """
    In-memory accumulator for match events.

    Subscribes to an EventBus and builds per-player and per-team stats
    from the aggregated round reports. Distance is summed over reported
    rounds only, so it undercounts when reports are sampled.
    """

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []
        self.scoring_plays: list[ScoringPlay] = []
        self.team_stats: dict[Team, TeamStats] = {Team.A: TeamStats(), Team.B: TeamStats()}
        self.player_stats: dict[int, PlayerStats] = {}
        self.rounds_logged = 0
        self.final_score: Optional[tuple[int, int]] = None
        self.winner: Optional[Team] = None

    def connect_to_event_bus(self, event_bus: EventBus) -> None:
        """Subscribe to events from an event bus."""
        event_bus.subscribe(RoundCompletedEvent, self._handle_round)
        event_bus.subscribe(PossessionEvent, self._handle_possession)
        event_bus.subscribe(GoalEvent, self._handle_goal)
        event_bus.subscribe(HalfTimeEvent, self._handle_half_time)
        event_bus.subscribe(MatchEndEvent, self._handle_match_end)

    def _get_or_create_player_stats(self, record: PlayerRecord) -> PlayerStats:
        if record.player_id not in self.player_stats:
            self.player_stats[record.player_id] = PlayerStats(
                player_id=record.player_id,
                team=record.team,
                speed=record.speed,
                dribble=record.dribble,
                kick=record.kick,
            )
        return self.player_stats[record.player_id]

    def add_entry(self, event, event_type: str, description: str, player_id: Optional[int] = None) -> None:
        self.entries.append(
            LogEntry(
                timestamp=event.timestamp,
                round_index=event.round_index,
                event_type=event_type,
                description=description,
                score_a=event.score_a,
                score_b=event.score_b,
                player_id=player_id,
            )
        )

    # =========================================================================
    # Handlers
    # =========================================================================

    def _handle_round(self, event: RoundCompletedEvent) -> None:
        self.rounds_logged += 1
        for record in event.report.players:
            stats = self._get_or_create_player_stats(record)
            stats.distance += distance(record.prev_pos, record.curr_pos)
            if record.reached:
                stats.reaches += 1

    def _handle_possession(self, event: PossessionEvent) -> None:
        team = self.team_stats[event.team]
        team.possessions += 1
        stats = self.player_stats.get(event.player_id)
        if stats is not None:
            stats.possessions += 1

        if event.kick_kind == "pass":
            team.passes += 1
            if stats is not None:
                stats.passes += 1
            receiver = self.player_stats.get(event.target_id) if event.target_id is not None else None
            if receiver is not None:
                receiver.passes_received += 1
        elif event.kick_kind == "advance":
            team.advances += 1
            if stats is not None:
                stats.advances += 1
        elif event.kick_kind == "reset":
            team.resets += 1

        self.add_entry(
            event,
            "POSSESSION",
            f"Player {event.player_id} ({event.team.value}) wins the ball "
            f"with {event.challenge} and plays a {event.kick_kind or 'hold'}",
            player_id=event.player_id,
        )

    def _handle_goal(self, event: GoalEvent) -> None:
        self.team_stats[event.team].goals += 1
        if event.scorer_id is not None and event.scorer_id in self.player_stats:
            self.player_stats[event.scorer_id].goals += 1

        self.scoring_plays.append(
            ScoringPlay(
                round_index=event.round_index,
                team=event.team,
                scorer_id=event.scorer_id,
                score_a_after=event.score_a,
                score_b_after=event.score_b,
            )
        )
        self.add_entry(
            event,
            "GOAL",
            f"GOAL {event.team.value} by player {event.scorer_id}",
            player_id=event.scorer_id,
        )

    def _handle_half_time(self, event: HalfTimeEvent) -> None:
        self.add_entry(event, "HALF_TIME", f"Half time: A {event.score_a} - {event.score_b} B")

    def _handle_match_end(self, event: MatchEndEvent) -> None:
        self.final_score = (event.score_a, event.score_b)
        self.winner = event.winner
        self.add_entry(event, "FULL_TIME", f"Full time: A {event.score_a} - {event.score_b} B")

    # =========================================================================
    # Queries
    # =========================================================================

    def get_scoring_summary(self) -> list[ScoringPlay]:
        return self.scoring_plays.copy()

    def get_team_stats(self, team: Team) -> TeamStats:
        return self.team_stats[team]

    def players_for(self, team: Team) -> list[PlayerStats]:
        return sorted(
            (s for s in self.player_stats.values() if s.team is team),
            key=lambda s: s.player_id,
        )

    @property
    def possession_count(self) -> int:
        return len([e for e in self.entries if e.event_type == "POSSESSION"])
