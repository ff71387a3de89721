"""Pydantic schemas for match runs."""

from typing import Optional

from pydantic import BaseModel, Field


# === Request schemas ===


class RunMatchRequest(BaseModel):
    """Request to run a new match."""

    rounds: int = Field(default=2700, ge=1, le=100_000)
    seed: Optional[int] = None
    report_every: int = Field(default=1, ge=1)


# === Response schemas ===


class ScoringPlaySchema(BaseModel):
    """One goal."""

    round_index: int
    team: str
    scorer_id: Optional[int] = None
    score_a_after: int
    score_b_after: int


class PlayerStatsSchema(BaseModel):
    """Accumulated per-player statistics."""

    player_id: int
    team: str
    speed: int
    dribble: int
    kick: int
    distance: int
    reaches: int
    possessions: int
    passes: int
    goals: int


class MatchSummary(BaseModel):
    """Outcome of a completed match."""

    match_id: str
    rounds: int
    seed: Optional[int] = None
    score_a: int
    score_b: int
    winner: Optional[str] = None  # None if drawn
    final_ball: Optional[tuple[int, int]] = None
    messages_sent: int = 0
    scoring_plays: list[ScoringPlaySchema] = Field(default_factory=list)
    players: list[PlayerStatsSchema] = Field(default_factory=list)
