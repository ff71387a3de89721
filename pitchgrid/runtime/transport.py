"""In-process message transport.

Each participant owns a Mailbox backed by an asyncio.Queue. Senders
never touch a receiver's state; they only enqueue immutable Messages.
Receivers collect a phase's messages from a known source set and get
them back keyed and ordered by source id.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Iterable, Optional

from pitchgrid.core.phases import RoundPhase
from pitchgrid.exceptions import StaleMessageError, SynchronizationError

from .messages import Message

logger = logging.getLogger(__name__)


class Mailbox:
    """Inbound queue for one participant.

    Messages for phases the owner has not reached yet are parked until
    the owner asks for them.
    """

    def __init__(self, owner: int) -> None:
        self.owner = owner
        self._queue: asyncio.Queue[Message] = asyncio.Queue()
        self._parked: dict[tuple[int, RoundPhase], dict[int, Message]] = defaultdict(dict)
        self._current_round = -1

    def deliver(self, message: Message) -> None:
        self._queue.put_nowait(message)

    @property
    def parked_count(self) -> int:
        return sum(len(bucket) for bucket in self._parked.values())

    async def collect(
        self,
        round_index: int,
        phase: RoundPhase,
        sources: Iterable[int],
        timeout: Optional[float] = None,
    ) -> dict[int, Any]:
        """Wait for one payload from every source for (round, phase).

        Returns:
            Payloads keyed by source id, in ascending source order

        Raises:
            StaleMessageError: A message from an earlier round arrived
            SynchronizationError: Not every source delivered within timeout
        """
        expected = set(sources)
        key = (round_index, phase)
        self._current_round = max(self._current_round, round_index)
        bucket = self._parked[key]

        try:
            async with asyncio.timeout(timeout):
                while not expected <= bucket.keys():
                    message = await self._queue.get()
                    if message.round_index < self._current_round:
                        raise StaleMessageError(
                            f"participant {self.owner} got a round {message.round_index} "
                            f"{message.phase.value} message from {message.source} "
                            f"during round {self._current_round}",
                            round_index=self._current_round,
                            phase=message.phase.value,
                            stalled=(message.source,),
                        )
                    self._parked[(message.round_index, message.phase)][message.source] = message
        except TimeoutError:
            missing = expected - bucket.keys()
            logger.warning(
                "Participant %d timed out in round %d %s waiting for %s",
                self.owner, round_index, phase.value, sorted(missing),
            )
            raise SynchronizationError(
                f"participant {self.owner} timed out collecting {phase.value} in round {round_index}",
                round_index=round_index,
                phase=phase.value,
                stalled=missing,
            ) from None

        del self._parked[key]
        return {source: bucket[source].payload for source in sorted(expected)}


class Network:
    """Registry of mailboxes with point-to-point and one-to-many delivery."""

    def __init__(self, participant_ids: Iterable[int]) -> None:
        self._mailboxes: dict[int, Mailbox] = {pid: Mailbox(pid) for pid in participant_ids}
        self.messages_sent = 0

    def mailbox(self, participant_id: int) -> Mailbox:
        return self._mailboxes[participant_id]

    @property
    def participant_ids(self) -> list[int]:
        return sorted(self._mailboxes)

    def send(self, message: Message, destination: int) -> None:
        """Deliver to exactly one participant."""
        self._mailboxes[destination].deliver(message)
        self.messages_sent += 1

    def disseminate(self, message: Message, destinations: Iterable[int]) -> None:
        """Deliver one source's message to every destination."""
        for destination in destinations:
            self.send(message, destination)
