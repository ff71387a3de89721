"""Participant base - the round protocol every agent walks.

All participants execute the same phase sequence each round:

    CLEAR_FLAGS → BALL_BROADCAST → MOVEMENT → ‖barrier‖
        → POSITION_HANDOFF → POSSESSION → KICK → BALL_HANDOFF
        → PLAYER_DATA → ‖barrier‖ → (REPORT)

Subclasses fill in the per-phase hooks. A hook may only talk to other
participants through the network helpers below; it never reads another
agent's attributes.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any, Iterable

from pitchgrid.core.phases import PhaseStateMachine, RoundPhase
from pitchgrid.runtime.messages import Message

if TYPE_CHECKING:
    from pitchgrid.config import MatchConfig
    from pitchgrid.runtime.barrier import RoundBarrier
    from pitchgrid.runtime.topology import Topology
    from pitchgrid.runtime.transport import Network

logger = logging.getLogger(__name__)

KICKOFF_ROUND = -1


class Participant:
    """One independently scheduled agent."""

    def __init__(
        self,
        participant_id: int,
        config: MatchConfig,
        topology: Topology,
        network: Network,
        barrier: RoundBarrier,
        rng: random.Random,
        report_every: int = 1,
    ) -> None:
        self.participant_id = participant_id
        self.config = config
        self.topology = topology
        self.rng = rng
        self.report_every = max(1, report_every)
        self.fsm = PhaseStateMachine()

        self._network = network
        self._mailbox = network.mailbox(participant_id)
        self._barrier = barrier

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.participant_id})"

    # =========================================================================
    # Protocol driver
    # =========================================================================

    async def run(self) -> None:
        """Execute kickoff and every round of the match."""
        self._enter(RoundPhase.KICKOFF, KICKOFF_ROUND)
        await self.on_kickoff()

        for round_index in range(self.config.rounds):
            await self.play_round(round_index)

        self._enter(RoundPhase.FINISHED, self.config.rounds - 1)

    async def play_round(self, round_index: int) -> None:
        """Walk one round's phase sequence."""
        self._enter(RoundPhase.CLEAR_FLAGS, round_index)
        self.on_clear_flags(round_index)

        self._enter(RoundPhase.BALL_BROADCAST, round_index)
        await self.on_ball_broadcast(round_index)

        self._enter(RoundPhase.MOVEMENT, round_index)
        self.on_movement(round_index)

        self._enter(RoundPhase.MOVEMENT_BARRIER, round_index)
        await self._barrier.wait(self.participant_id, round_index, RoundPhase.MOVEMENT_BARRIER.value)

        self._enter(RoundPhase.POSITION_HANDOFF, round_index)
        await self.on_position_handoff(round_index)

        self._enter(RoundPhase.POSSESSION, round_index)
        await self.on_possession(round_index)

        self._enter(RoundPhase.KICK, round_index)
        await self.on_kick(round_index)

        self._enter(RoundPhase.BALL_HANDOFF, round_index)
        await self.on_ball_handoff(round_index)

        self._enter(RoundPhase.PLAYER_DATA, round_index)
        await self.on_player_data(round_index)

        self._enter(RoundPhase.ROUND_BARRIER, round_index)
        await self._barrier.wait(self.participant_id, round_index, RoundPhase.ROUND_BARRIER.value)

        if self.is_report_round(round_index):
            self._enter(RoundPhase.REPORT, round_index)
            await self.on_report(round_index)

    def is_report_round(self, round_index: int) -> bool:
        """Aggregate every report_every rounds and always on the last round."""
        return (
            (round_index + 1) % self.report_every == 0
            or round_index == self.config.rounds - 1
        )

    # =========================================================================
    # Hooks
    # =========================================================================

    async def on_kickoff(self) -> None:
        pass

    def on_clear_flags(self, round_index: int) -> None:
        pass

    async def on_ball_broadcast(self, round_index: int) -> None:
        pass

    def on_movement(self, round_index: int) -> None:
        pass

    async def on_position_handoff(self, round_index: int) -> None:
        pass

    async def on_possession(self, round_index: int) -> None:
        pass

    async def on_kick(self, round_index: int) -> None:
        pass

    async def on_ball_handoff(self, round_index: int) -> None:
        pass

    async def on_player_data(self, round_index: int) -> None:
        pass

    async def on_report(self, round_index: int) -> None:
        pass

    # =========================================================================
    # Network helpers
    # =========================================================================

    def _enter(self, phase: RoundPhase, round_index: int) -> None:
        self.fsm.transition_to(phase, round_index=round_index)

    def _disseminate(self, round_index: int, payload: Any, destinations: Iterable[int]) -> None:
        message = Message(
            round_index=round_index,
            phase=self.fsm.phase,
            source=self.participant_id,
            payload=payload,
        )
        self._network.disseminate(message, destinations)

    def _send(self, round_index: int, payload: Any, destination: int) -> None:
        message = Message(
            round_index=round_index,
            phase=self.fsm.phase,
            source=self.participant_id,
            payload=payload,
        )
        self._network.send(message, destination)

    async def _collect(self, round_index: int, sources: Iterable[int]) -> dict[int, Any]:
        """Collect this phase's payloads from every source, ascending by id."""
        return await self._mailbox.collect(
            round_index,
            self.fsm.phase,
            sources,
            timeout=self.config.barrier_timeout,
        )
