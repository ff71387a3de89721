"""Error taxonomy for match simulation.

Routing misses and out-of-bounds kicks are ordinary state and never
show up here. Everything below is fatal for the match it occurs in.
"""

from __future__ import annotations

from typing import Iterable, Optional


class PitchgridError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(PitchgridError, ValueError):
    """Participant count or role partition does not match the match constants."""


class SynchronizationError(PitchgridError, RuntimeError):
    """A participant failed to arrive at a barrier or deliver a phase message.

    Attributes:
        round_index: Round in which the stall happened (-1 for kickoff)
        phase: Name of the phase being waited on
        stalled: Participant ids that never arrived, ascending
    """

    def __init__(
        self,
        message: str,
        round_index: int = -1,
        phase: str = "",
        stalled: Optional[Iterable[int]] = None,
    ) -> None:
        self.round_index = round_index
        self.phase = phase
        self.stalled = tuple(sorted(stalled or ()))
        if self.stalled:
            message = f"{message} (stalled: {', '.join(str(s) for s in self.stalled)})"
        super().__init__(message)


class StaleMessageError(SynchronizationError):
    """A message tagged with an earlier round reached a participant."""


class InvalidPhaseTransition(PitchgridError):
    """Raised when an invalid phase transition is attempted."""
