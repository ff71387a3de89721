"""Message passing runtime: transport, barriers and bootstrap."""

from .barrier import RoundBarrier
from .messages import (
    BallPosition,
    Challenge,
    KickOutcome,
    Message,
    PlayerUpdate,
    PossessionVerdict,
    ShardSnapshot,
)
from .topology import Role, Topology
from .transport import Mailbox, Network

__all__ = [
    "BallPosition",
    "Challenge",
    "KickOutcome",
    "Mailbox",
    "Message",
    "Network",
    "PlayerUpdate",
    "PossessionVerdict",
    "Role",
    "RoundBarrier",
    "ShardSnapshot",
    "Topology",
]
