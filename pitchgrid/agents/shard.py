"""Field shard agent - tracks which entities sit inside one rectangle.

A shard never moves anything. Each round it rebuilds its player cache
from the players' own broadcasts and revokes/claims the ball when a
kick moves it. Every shard applies the same routing function to the
same broadcast values, so exactly one shard (or none, off-pitch) ends
up holding each entity without any shard-to-shard traffic.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from pitchgrid.core.entities import Ball, PlayerRecord, Team
from pitchgrid.core.geometry import Point, shard_bounds, shard_of_point
from pitchgrid.policies.possession import ContestResult, resolve_contest
from pitchgrid.report import RoundReport
from pitchgrid.runtime.messages import (
    BallPosition,
    KickOutcome,
    PlayerUpdate,
    PossessionVerdict,
    ShardSnapshot,
)

from .base import Participant

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig
    from pitchgrid.runtime.barrier import RoundBarrier
    from pitchgrid.runtime.topology import Topology
    from pitchgrid.runtime.transport import Network

logger = logging.getLogger(__name__)

ReportSink = Callable[[RoundReport], None]

AGGREGATOR_ID = 0


class FieldShard(Participant):
    """Owner of one rectangular region of the pitch."""

    def __init__(
        self,
        participant_id: int,
        config: MatchConfig,
        topology: Topology,
        network: Network,
        barrier: RoundBarrier,
        rng: random.Random,
        report_every: int = 1,
        report_sink: Optional[ReportSink] = None,
    ) -> None:
        super().__init__(participant_id, config, topology, network, barrier, rng, report_every)
        self.bounds = shard_bounds(participant_id, config)
        self.ball = Ball()
        self.players: dict[int, PlayerRecord] = {}
        self.score = {Team.A: 0, Team.B: 0}

        self.last_contest: Optional[ContestResult] = None
        self._kick: Optional[tuple[int, KickOutcome]] = None
        self._report_sink = report_sink

        if self.owns(config.center):
            self.ball.place(config.center)

    def owns(self, point: Optional[Point]) -> bool:
        return shard_of_point(point, self.config) == self.participant_id

    @property
    def holds_ball(self) -> bool:
        return self.ball.is_assigned

    # =========================================================================
    # Ownership handoff
    # =========================================================================

    def apply_player_updates(self, updates: Mapping[int, PlayerUpdate]) -> None:
        """Revoke-then-claim for every player, ascending id."""
        for player_id in sorted(updates):
            record = updates[player_id].record
            self.players.pop(player_id, None)
            if self.owns(record.curr_pos):
                self.players[player_id] = record

    def apply_ball_move(self, new_position: Point) -> None:
        """Revoke-then-claim for the ball."""
        had_ball = self.holds_ball
        self.ball.revoke()
        if self.owns(new_position):
            self.ball.place(new_position)
        if had_ball != self.holds_ball:
            logger.debug(
                "Shard %d %s ball at %s",
                self.participant_id, "claims" if self.holds_ball else "releases", new_position,
            )

    # =========================================================================
    # Phases
    # =========================================================================

    async def on_kickoff(self) -> None:
        updates = await self._collect(-1, self.topology.player_ids)
        self.apply_player_updates(updates)

    def on_clear_flags(self, round_index: int) -> None:
        self.last_contest = None
        self._kick = None

    async def on_ball_broadcast(self, round_index: int) -> None:
        self._disseminate(round_index, BallPosition(self.ball.position), self.topology.player_ids)

    async def on_position_handoff(self, round_index: int) -> None:
        updates = await self._collect(round_index, self.topology.player_ids)
        self.apply_player_updates(updates)

    async def on_possession(self, round_index: int) -> None:
        challenges = await self._collect(round_index, self.topology.player_ids)

        if self.holds_ball:
            contest = resolve_contest({pid: c.value for pid, c in challenges.items()}, self.rng)
            self.last_contest = contest
            verdict = PossessionVerdict(owns_ball=True, winner=contest.winner, challenge=contest.challenge)
            if contest.winner is not None:
                logger.debug(
                    "Round %d: shard %d awards ball to %d (challenge %d, contenders %s)",
                    round_index, self.participant_id, contest.winner,
                    contest.challenge, list(contest.contenders),
                )
        else:
            verdict = PossessionVerdict(owns_ball=False)

        self._disseminate(round_index, verdict, self.topology.player_ids)

    async def on_kick(self, round_index: int) -> None:
        outcomes = await self._collect(round_index, self.topology.player_ids)
        self._kick = next(
            ((pid, outcome) for pid, outcome in outcomes.items() if outcome.kicked),
            None,
        )

    async def on_ball_handoff(self, round_index: int) -> None:
        if self._kick is None:
            return
        _, outcome = self._kick
        if outcome.is_goal and outcome.team is not None:
            self.score[outcome.team] += 1
        if outcome.ball is not None:
            self.apply_ball_move(outcome.ball)

    async def on_player_data(self, round_index: int) -> None:
        updates = await self._collect(round_index, self.topology.player_ids)
        for player_id, update in updates.items():
            if player_id in self.players:
                self.players[player_id] = update.record

    async def on_report(self, round_index: int) -> None:
        snapshot = ShardSnapshot(
            ball=self.ball.position,
            players=tuple(self.players[pid] for pid in sorted(self.players)),
        )
        self._send(round_index, snapshot, AGGREGATOR_ID)

        if self.participant_id != AGGREGATOR_ID:
            return

        snapshots = await self._collect(round_index, self.topology.shard_ids)
        report = self._aggregate(round_index, snapshots)
        if self._report_sink is not None:
            self._report_sink(report)

    def _aggregate(self, round_index: int, snapshots: Mapping[int, ShardSnapshot]) -> RoundReport:
        owners = tuple(sid for sid, snap in snapshots.items() if snap.ball is not None)
        ball = snapshots[owners[0]].ball if owners else None
        players = sorted(
            (record for snap in snapshots.values() for record in snap.players),
            key=lambda record: record.player_id,
        )

        kicker = kind = goal = target = None
        if self._kick is not None:
            kicker, outcome = self._kick
            kind = outcome.kind
            target = outcome.target_id
            goal = outcome.team if outcome.is_goal else None

        return RoundReport(
            round_index=round_index,
            ball=ball,
            ball_owners=owners,
            players=tuple(players),
            kicker=kicker,
            kick_kind=kind,
            pass_target=target,
            goal=goal,
            score_a=self.score[Team.A],
            score_b=self.score[Team.B],
        )
