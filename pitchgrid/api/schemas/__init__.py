"""API request and response schemas."""

from pitchgrid.api.schemas.match import (
    MatchSummary,
    PlayerStatsSchema,
    RunMatchRequest,
    ScoringPlaySchema,
)

__all__ = ["MatchSummary", "PlayerStatsSchema", "RunMatchRequest", "ScoringPlaySchema"]
