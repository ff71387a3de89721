"""Match - Round synchronization for the sharded simulation.

The Match wires up the participants and lets them run. It owns no world
state: shards and players run as independent asyncio tasks that only
exchange immutable messages through the Network and meet at the
RoundBarrier twice per round.

Match Lifecycle:
    1. Bootstrap - Topology validated, mailboxes and barrier created
    2. Kickoff - Players disseminate starting positions to shards
    3. Rounds - Every participant walks the same phase sequence
    4. Report - Shard 0 aggregates snapshots; events go to the bus
    5. Final whistle - MatchEndEvent, MatchResult returned

Usage:
    match = Match(MatchConfig(rounds=90, seed=7))
    result = match.run()
"""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from pitchgrid.agents.player import PlayerAgent
from pitchgrid.agents.shard import FieldShard
from pitchgrid.config import MatchConfig
from pitchgrid.core.entities import Team
from pitchgrid.core.geometry import Point
from pitchgrid.events import (
    EventBus,
    GoalEvent,
    HalfTimeEvent,
    MatchEndEvent,
    PossessionEvent,
    RoundCompletedEvent,
)
from pitchgrid.report import RoundReport
from pitchgrid.runtime.barrier import RoundBarrier
from pitchgrid.runtime.topology import Topology
from pitchgrid.runtime.transport import Network

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of a completed match."""

    match_id: str
    score_a: int
    score_b: int
    rounds_played: int
    final_ball: Optional[Point]
    reports: list[RoundReport] = field(default_factory=list)
    messages_sent: int = 0

    @property
    def winner(self) -> Optional[Team]:
        if self.score_a == self.score_b:
            return None
        return Team.A if self.score_a > self.score_b else Team.B


def participant_rng(seed: Optional[int], participant_id: int) -> random.Random:
    """Independent random source per participant, reproducible for a seed."""
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{participant_id}")


class Match:
    """
    Runs one sharded match.

    Args:
        config: Match constants (defaults to the full-size pitch)
        event_bus: Bus that receives round, possession and goal events
        on_report: Extra sink called with every aggregated RoundReport
        report_every: Aggregate every N rounds (the last round always is)
        keep_reports: Retain every RoundReport on the MatchResult
        topology: Pre-built role partition; validated against config
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        event_bus: Optional[EventBus] = None,
        on_report: Optional[Callable[[RoundReport], None]] = None,
        report_every: int = 1,
        keep_reports: bool = False,
        topology: Optional[Topology] = None,
    ) -> None:
        self.config = config or MatchConfig()
        self.event_bus = event_bus or EventBus()
        self.topology = topology or Topology.build(self.config)
        self.topology.validate(self.config)

        self.match_id = uuid.uuid4().hex[:12]
        self.report_every = max(1, report_every)
        self.keep_reports = keep_reports
        self._on_report = on_report

        self._reports: list[RoundReport] = []
        self._last_report: Optional[RoundReport] = None
        self._half_time_announced = False

        self.shards: list[FieldShard] = []
        self.players: list[PlayerAgent] = []
        self.network: Optional[Network] = None

    # =========================================================================
    # Running
    # =========================================================================

    def run(self) -> MatchResult:
        """Run the match to completion on a fresh event loop."""
        return asyncio.run(self.run_async())

    async def run_async(self) -> MatchResult:
        """Run the match inside an existing event loop."""
        self._build_participants()
        participants = [*self.shards, *self.players]

        logger.info(
            "Match %s: %d shards, %d players, %d rounds",
            self.match_id, len(self.shards), len(self.players), self.config.rounds,
        )

        tasks = [
            asyncio.create_task(p.run(), name=f"{type(p).__name__}-{p.participant_id}")
            for p in participants
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error("Match %s aborted", self.match_id)
            raise

        return self._finish()

    def _build_participants(self) -> None:
        config = self.config
        self.network = Network(self.topology.all_ids)
        barrier = RoundBarrier(self.topology.all_ids, timeout=config.barrier_timeout)

        self.shards = [
            FieldShard(
                sid,
                config,
                self.topology,
                self.network,
                barrier,
                participant_rng(config.seed, sid),
                report_every=self.report_every,
                report_sink=self._handle_report if sid == 0 else None,
            )
            for sid in self.topology.shard_ids
        ]
        self.players = [
            PlayerAgent(
                pid,
                config,
                self.topology,
                self.network,
                barrier,
                participant_rng(config.seed, pid),
                report_every=self.report_every,
            )
            for pid in self.topology.player_ids
        ]

    # =========================================================================
    # Reporting
    # =========================================================================

    def _handle_report(self, report: RoundReport) -> None:
        """Sink for shard 0's aggregated report. Never feeds back into the match."""
        self._last_report = report
        if self.keep_reports:
            self._reports.append(report)

        context = dict(
            match_id=self.match_id,
            round_index=report.round_index,
            score_a=report.score_a,
            score_b=report.score_b,
        )
        bus = self.event_bus
        bus.emit(RoundCompletedEvent(report=report, **context))

        if report.kicker is not None:
            record = report.player(report.kicker)
            bus.emit(
                PossessionEvent(
                    player_id=report.kicker,
                    team=record.team if record else self.topology.team_of(report.kicker),
                    challenge=record.challenge if record else 0,
                    kick_kind=report.kick_kind.value if report.kick_kind else "",
                    target_id=report.pass_target,
                    **context,
                )
            )

        if report.goal is not None:
            logger.info(
                "Round %d: goal for %s by %s (A %d - %d B)",
                report.round_index, report.goal.value, report.kicker,
                report.score_a, report.score_b,
            )
            bus.emit(GoalEvent(team=report.goal, scorer_id=report.kicker, **context))

        if not self._half_time_announced and report.round_index >= self.config.half_time_round - 1:
            self._half_time_announced = True
            bus.emit(HalfTimeEvent(**context))

        if self._on_report is not None:
            self._on_report(report)

    def _finish(self) -> MatchResult:
        report = self._last_report
        score_a = report.score_a if report else 0
        score_b = report.score_b if report else 0
        result = MatchResult(
            match_id=self.match_id,
            score_a=score_a,
            score_b=score_b,
            rounds_played=self.config.rounds,
            final_ball=report.ball if report else None,
            reports=list(self._reports),
            messages_sent=self.network.messages_sent if self.network else 0,
        )
        self.event_bus.emit(
            MatchEndEvent(
                match_id=self.match_id,
                round_index=self.config.rounds - 1,
                score_a=score_a,
                score_b=score_b,
                winner=result.winner,
                rounds_played=self.config.rounds,
            )
        )
        logger.info("Match %s finished: A %d - %d B", self.match_id, score_a, score_b)
        return result
