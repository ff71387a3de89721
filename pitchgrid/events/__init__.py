"""Event system for match simulation."""

from pitchgrid.events.bus import EventBus
from pitchgrid.events.types import (
    GoalEvent,
    HalfTimeEvent,
    MatchEndEvent,
    MatchEvent,
    PossessionEvent,
    RoundCompletedEvent,
)

__all__ = [
    "EventBus",
    "GoalEvent",
    "HalfTimeEvent",
    "MatchEndEvent",
    "MatchEvent",
    "PossessionEvent",
    "RoundCompletedEvent",
]
