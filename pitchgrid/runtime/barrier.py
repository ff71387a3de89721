"""Reusable rendezvous barrier for a fixed set of participants."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from pitchgrid.exceptions import SynchronizationError

logger = logging.getLogger(__name__)


class RoundBarrier:
    """
    Barrier that releases once every party has arrived.

    Unlike asyncio.Barrier it knows who the parties are, so a timed-out
    wait reports exactly which participants never showed up.

    Example:
        barrier = RoundBarrier(parties=range(34), timeout=5.0)
        await barrier.wait(participant_id, round_index=3, phase="movement_barrier")
    """

    def __init__(self, parties: Iterable[int], timeout: Optional[float] = None) -> None:
        self._parties = frozenset(parties)
        if not self._parties:
            raise ValueError("a barrier needs at least one party")
        self._timeout = timeout
        self._arrived: set[int] = set()
        self._generation = 0
        self._condition = asyncio.Condition()

    @property
    def parties(self) -> frozenset[int]:
        return self._parties

    @property
    def generation(self) -> int:
        """Number of times the barrier has released."""
        return self._generation

    async def wait(self, participant_id: int, round_index: int = -1, phase: str = "") -> int:
        """
        Block until every party has called wait() for this generation.

        Returns:
            The generation that was released

        Raises:
            SynchronizationError: If the wait exceeds the timeout
        """
        if participant_id not in self._parties:
            raise ValueError(f"participant {participant_id} is not a barrier party")

        async with self._condition:
            generation = self._generation
            self._arrived.add(participant_id)

            if self._arrived == self._parties:
                self._arrived = set()
                self._generation += 1
                self._condition.notify_all()
                return generation

            try:
                async with asyncio.timeout(self._timeout):
                    await self._condition.wait_for(lambda: self._generation != generation)
            except TimeoutError:
                stalled = self._parties - self._arrived
                logger.warning(
                    "Barrier timed out in round %d %s; missing %s",
                    round_index, phase, sorted(stalled),
                )
                raise SynchronizationError(
                    f"barrier {phase or 'wait'} timed out in round {round_index}",
                    round_index=round_index,
                    phase=phase,
                    stalled=stalled,
                ) from None

            return generation
