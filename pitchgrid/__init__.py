"""pitchgrid - football match simulated by sharded, message-passing agents."""

from pitchgrid.config import MatchConfig
from pitchgrid.match import Match, MatchResult

__all__ = ["Match", "MatchConfig", "MatchResult"]

__version__ = "0.1.0"
