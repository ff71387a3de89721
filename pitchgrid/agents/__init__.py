"""Independently scheduled match participants."""

from .base import Participant
from .player import PlayerAgent
from .shard import FieldShard

__all__ = ["FieldShard", "Participant", "PlayerAgent"]
