"""Match constants agreed by every participant before round 0.

Coordinate system:
    Origin (0, 0) = Corner of the pitch at the left goal line
    +X = Along the length, toward the right goal (columns)
    +Y = Across the width (rows)

All measurements are integer grid cells.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pitchgrid.core.geometry import Point


class MatchConfig(BaseModel):
    """Immutable configuration for one match.

    The defaults describe the full 96 x 128 pitch split into twelve
    32 x 32 shards with two teams of eleven.
    """

    model_config = ConfigDict(frozen=True)

    # Pitch
    field_length: int = Field(default=128, gt=0)
    field_width: int = Field(default=96, gt=0)
    shard_length: int = Field(default=32, gt=0)
    shard_width: int = Field(default=32, gt=0)

    # Goal mouths (posts share y on both ends)
    goal_post_low: int = 44
    goal_post_high: int = 52

    # Match length
    rounds: int = Field(default=2700, ge=1)

    # Squads
    players_per_team: int = Field(default=11, ge=1)
    skill_budget: int = Field(default=15, ge=3)
    skill_max: int = Field(default=10, ge=1)

    # Runtime
    seed: Optional[int] = None
    barrier_timeout: Optional[float] = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def _check_geometry(self) -> MatchConfig:
        if self.field_length % self.shard_length:
            raise ValueError("field_length must be a multiple of shard_length")
        if self.field_width % self.shard_width:
            raise ValueError("field_width must be a multiple of shard_width")
        if not 0 <= self.goal_post_low < self.goal_post_high < self.field_width:
            raise ValueError("goal posts must be ordered and inside the field width")
        # speed rolls up to skill_max, dribble and kick still need one point each
        if self.skill_max + 2 > self.skill_budget:
            raise ValueError("skill_max leaves no room for dribble and kick")
        return self

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def shard_columns(self) -> int:
        return self.field_length // self.shard_length

    @property
    def shard_rows(self) -> int:
        return self.field_width // self.shard_width

    @property
    def shard_count(self) -> int:
        return self.shard_columns * self.shard_rows

    @property
    def player_count(self) -> int:
        return 2 * self.players_per_team

    @property
    def participant_count(self) -> int:
        return self.shard_count + self.player_count

    @property
    def center(self) -> Point:
        """Kickoff spot; goals reset the ball here."""
        return Point(self.field_length // 2, self.field_width // 2)

    @property
    def half_time_round(self) -> int:
        """First round of the second half."""
        return self.rounds // 2

    @property
    def left_goal_x(self) -> int:
        return 0

    @property
    def right_goal_x(self) -> int:
        return self.field_length - 1
