"""Round Phase State Machine - Explicit round phase transitions.

Every participant walks the same phase sequence each round. All phase
changes go through this state machine so a participant can never skip
ahead of the protocol.

Match Lifecycle:
    SETUP → KICKOFF → CLEAR_FLAGS

Round Lifecycle:
    CLEAR_FLAGS → BALL_BROADCAST → MOVEMENT → MOVEMENT_BARRIER
        → POSITION_HANDOFF → POSSESSION → KICK → BALL_HANDOFF
        → PLAYER_DATA → ROUND_BARRIER

    From ROUND_BARRIER:
        → REPORT (round is aggregated)
        → CLEAR_FLAGS (next round)
        → FINISHED (last round)

    From REPORT:
        → CLEAR_FLAGS | FINISHED
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Set

from pitchgrid.exceptions import InvalidPhaseTransition


class RoundPhase(str, Enum):
    """Current phase of a participant."""
    SETUP = "setup"                        # Participant created, not yet wired
    KICKOFF = "kickoff"                    # Initial player positions disseminated
    CLEAR_FLAGS = "clear_flags"            # Per-round flags reset
    BALL_BROADCAST = "ball_broadcast"      # Shards tell players where the ball is
    MOVEMENT = "movement"                  # Players move toward the ball
    MOVEMENT_BARRIER = "movement_barrier"  # Everyone finished moving
    POSITION_HANDOFF = "position_handoff"  # Player positions routed to shards
    POSSESSION = "possession"              # Challenge contest at the ball's shard
    KICK = "kick"                          # Winner resolves the kick
    BALL_HANDOFF = "ball_handoff"          # Ball ownership moves between shards
    PLAYER_DATA = "player_data"            # Final player records routed to shards
    ROUND_BARRIER = "round_barrier"        # Consistent snapshot reached
    REPORT = "report"                      # Snapshot aggregated at shard 0
    FINISHED = "finished"                  # Match over


VALID_TRANSITIONS: Dict[RoundPhase, Set[RoundPhase]] = {
    RoundPhase.SETUP: {RoundPhase.KICKOFF},
    RoundPhase.KICKOFF: {RoundPhase.CLEAR_FLAGS, RoundPhase.FINISHED},
    RoundPhase.CLEAR_FLAGS: {RoundPhase.BALL_BROADCAST},
    RoundPhase.BALL_BROADCAST: {RoundPhase.MOVEMENT},
    RoundPhase.MOVEMENT: {RoundPhase.MOVEMENT_BARRIER},
    RoundPhase.MOVEMENT_BARRIER: {RoundPhase.POSITION_HANDOFF},
    RoundPhase.POSITION_HANDOFF: {RoundPhase.POSSESSION},
    RoundPhase.POSSESSION: {RoundPhase.KICK},
    RoundPhase.KICK: {RoundPhase.BALL_HANDOFF},
    RoundPhase.BALL_HANDOFF: {RoundPhase.PLAYER_DATA},
    RoundPhase.PLAYER_DATA: {RoundPhase.ROUND_BARRIER},
    RoundPhase.ROUND_BARRIER: {
        RoundPhase.REPORT,
        RoundPhase.CLEAR_FLAGS,
        RoundPhase.FINISHED,
    },
    RoundPhase.REPORT: {RoundPhase.CLEAR_FLAGS, RoundPhase.FINISHED},
    RoundPhase.FINISHED: set(),
}


@dataclass
class PhaseTransition:
    """Record of a phase transition."""
    from_phase: RoundPhase
    to_phase: RoundPhase
    round_index: int


TransitionCallback = Callable[[PhaseTransition], None]


class PhaseStateMachine:
    """Manages round phase transitions with validation.

    Usage:
        fsm = PhaseStateMachine()
        fsm.transition_to(RoundPhase.KICKOFF)
        fsm.transition_to(RoundPhase.CLEAR_FLAGS, round_index=0)
    """

    def __init__(self, initial_phase: RoundPhase = RoundPhase.SETUP, keep_history: bool = False):
        self._phase = initial_phase
        self._keep_history = keep_history
        self._history: list[PhaseTransition] = []
        self._callbacks: list[TransitionCallback] = []

    @property
    def phase(self) -> RoundPhase:
        """Current phase."""
        return self._phase

    @property
    def history(self) -> list[PhaseTransition]:
        """History of phase transitions (empty unless keep_history)."""
        return self._history.copy()

    def can_transition_to(self, target: RoundPhase) -> bool:
        """Check if transition to target phase is valid."""
        return target in VALID_TRANSITIONS.get(self._phase, set())

    def transition_to(self, target: RoundPhase, round_index: int = -1) -> None:
        """Transition to a new phase.

        Raises:
            InvalidPhaseTransition: If the protocol does not allow the move
        """
        if not self.can_transition_to(target):
            raise InvalidPhaseTransition(
                f"Cannot transition from {self._phase.value} to {target.value}. "
                f"Valid targets: {sorted(p.value for p in VALID_TRANSITIONS.get(self._phase, set()))}"
            )

        transition = PhaseTransition(
            from_phase=self._phase,
            to_phase=target,
            round_index=round_index,
        )
        self._phase = target
        if self._keep_history:
            self._history.append(transition)

        for callback in self._callbacks:
            callback(transition)

    def on_transition(self, callback: TransitionCallback) -> None:
        """Register a callback for phase transitions."""
        self._callbacks.append(callback)

    def reset(self, initial_phase: RoundPhase = RoundPhase.SETUP) -> None:
        """Reset to initial state."""
        self._phase = initial_phase
        self._history.clear()

    @property
    def is_finished(self) -> bool:
        return self._phase == RoundPhase.FINISHED

    @property
    def ball_is_contested(self) -> bool:
        """True while possession or kick is being resolved."""
        return self._phase in (RoundPhase.POSSESSION, RoundPhase.KICK)
