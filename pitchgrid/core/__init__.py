"""Core simulation types: geometry, entities and round phases."""

from .geometry import (
    UNASSIGNED,
    Point,
    ShardBounds,
    clamp_to_field,
    distance,
    in_bounds,
    in_range,
    shard_bounds,
    shard_of,
    shard_of_point,
)
from .entities import (
    NO_CHALLENGE,
    Ball,
    Player,
    PlayerRecord,
    RoundFlags,
    Skills,
    Team,
    roll_skills,
)
from .phases import PhaseStateMachine, PhaseTransition, RoundPhase

__all__ = [
    "UNASSIGNED",
    "NO_CHALLENGE",
    "Ball",
    "PhaseStateMachine",
    "PhaseTransition",
    "Player",
    "PlayerRecord",
    "Point",
    "RoundFlags",
    "RoundPhase",
    "ShardBounds",
    "Skills",
    "Team",
    "clamp_to_field",
    "distance",
    "in_bounds",
    "in_range",
    "roll_skills",
    "shard_bounds",
    "shard_of",
    "shard_of_point",
]
