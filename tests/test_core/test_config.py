"""Tests for match configuration."""

import pytest
from pydantic import ValidationError

from pitchgrid.config import MatchConfig
from pitchgrid.core.geometry import Point


class TestMatchConfig:
    def test_defaults(self):
        config = MatchConfig()
        assert config.shard_columns == 4
        assert config.shard_rows == 3
        assert config.shard_count == 12
        assert config.player_count == 22
        assert config.participant_count == 34
        assert config.center == Point(64, 48)
        assert config.half_time_round == 1350
        assert config.right_goal_x == 127

    def test_is_frozen(self):
        config = MatchConfig()
        with pytest.raises(ValidationError):
            config.rounds = 5

    def test_shards_must_tile_field(self):
        with pytest.raises(ValidationError):
            MatchConfig(shard_length=30)

    def test_posts_must_fit(self):
        with pytest.raises(ValidationError):
            MatchConfig(goal_post_low=60, goal_post_high=50)

    def test_skill_max_must_leave_room(self):
        with pytest.raises(ValidationError):
            MatchConfig(skill_max=14)

    def test_small_pitch(self):
        config = MatchConfig(
            field_length=64, field_width=32, goal_post_low=12, goal_post_high=20,
            players_per_team=2,
        )
        assert config.shard_count == 2
        assert config.participant_count == 6
