"""Player agent - owns one player's authoritative state."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from pitchgrid.core.entities import Player, PlayerRecord, roll_skills
from pitchgrid.core.geometry import Point
from pitchgrid.policies.kick import resolve_kick
from pitchgrid.policies.movement import MoveResult, plan_move
from pitchgrid.policies.possession import challenge_value
from pitchgrid.runtime.messages import (
    BallPosition,
    Challenge,
    KickOutcome,
    PlayerUpdate,
    PossessionVerdict,
)

from .base import Participant

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig
    from pitchgrid.runtime.barrier import RoundBarrier
    from pitchgrid.runtime.topology import Topology
    from pitchgrid.runtime.transport import Network

logger = logging.getLogger(__name__)


class PlayerAgent(Participant):
    """Moves toward the ball, challenges for it and kicks it when awarded.

    The agent's Player is never handed to anyone else; shards and
    teammates only ever receive PlayerRecord copies.
    """

    def __init__(
        self,
        participant_id: int,
        config: MatchConfig,
        topology: Topology,
        network: Network,
        barrier: RoundBarrier,
        rng: random.Random,
        report_every: int = 1,
        start: Optional[Point] = None,
    ) -> None:
        super().__init__(participant_id, config, topology, network, barrier, rng, report_every)

        skills = roll_skills(rng, config.skill_budget, config.skill_max)
        if start is None:
            start = Point(rng.randrange(config.field_length), rng.randrange(config.field_width))

        self.player = Player(
            player_id=participant_id,
            team=topology.team_of(participant_id),
            skills=skills,
            prev_pos=start,
            curr_pos=start,
        )
        self.known_ball: Optional[Point] = None
        self.last_move: Optional[MoveResult] = None
        self._teammates: dict[int, Point] = {}

    # =========================================================================
    # Phases
    # =========================================================================

    async def on_kickoff(self) -> None:
        self._disseminate(-1, PlayerUpdate(self.player.record()), self.topology.shard_ids)

    def on_clear_flags(self, round_index: int) -> None:
        self.player.flags.reset()

    async def on_ball_broadcast(self, round_index: int) -> None:
        positions = await self._collect(round_index, self.topology.shard_ids)
        for payload in positions.values():
            if isinstance(payload, BallPosition) and payload.position is not None:
                self.known_ball = payload.position
                break

    def on_movement(self, round_index: int) -> None:
        result = plan_move(
            self.player.curr_pos,
            self.known_ball,
            self.player.skills.speed,
            self.config,
            self.rng,
        )
        self.player.move_to(result.position)
        self.player.flags.reached_ball = result.reached_ball
        self.last_move = result

    async def on_position_handoff(self, round_index: int) -> None:
        record = self.player.record()
        destinations = self.topology.shard_ids + self.topology.player_ids
        self._disseminate(round_index, PlayerUpdate(record), destinations)

        updates = await self._collect(round_index, self.topology.player_ids)
        self._teammates = {
            pid: update.record.curr_pos
            for pid, update in updates.items()
            if update.record.team is self.player.team and pid != self.participant_id
        }

    async def on_possession(self, round_index: int) -> None:
        flags = self.player.flags
        if flags.reached_ball:
            flags.challenge = challenge_value(self.player.skills.dribble, self.rng)
        self._disseminate(round_index, Challenge(flags.challenge), self.topology.shard_ids)

        verdicts = await self._collect(round_index, self.topology.shard_ids)
        owner_verdict: Optional[PossessionVerdict] = next(
            (v for v in verdicts.values() if v.owns_ball),
            None,
        )
        flags.kicked = owner_verdict is not None and owner_verdict.winner == self.participant_id

    async def on_kick(self, round_index: int) -> None:
        if not self.player.flags.kicked or self.known_ball is None:
            self._disseminate(round_index, KickOutcome(kicked=False), self.topology.shard_ids)
            return

        decision = resolve_kick(
            kicker_id=self.participant_id,
            kicker=self.player.curr_pos,
            kick=self.player.skills.kick,
            team=self.player.team,
            ball=self.known_ball,
            teammates=self._teammates,
            round_index=round_index,
            config=self.config,
            rng=self.rng,
        )
        logger.debug(
            "Round %d: player %d kicks (%s) to %s",
            round_index, self.participant_id, decision.kind.value, decision.ball,
        )
        self.known_ball = decision.ball
        outcome = KickOutcome(
            kicked=True,
            ball=decision.ball,
            team=self.player.team,
            kind=decision.kind,
            target_id=decision.target_id,
        )
        self._disseminate(round_index, outcome, self.topology.shard_ids)

    async def on_player_data(self, round_index: int) -> None:
        self._disseminate(round_index, PlayerUpdate(self.player.record()), self.topology.shard_ids)

    # =========================================================================
    # Queries
    # =========================================================================

    def record(self) -> PlayerRecord:
        return self.player.record()
