"""Match logging and output."""

from pitchgrid.logging.markdown_writer import MarkdownMatchWriter
from pitchgrid.logging.match_log import MatchLog, PlayerStats, ScoringPlay, TeamStats

__all__ = ["MarkdownMatchWriter", "MatchLog", "PlayerStats", "ScoringPlay", "TeamStats"]
