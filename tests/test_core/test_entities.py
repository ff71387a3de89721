"""Tests for skills, flags, ball and player records."""

import random

import pytest

from pitchgrid.core.entities import (
    NO_CHALLENGE,
    Ball,
    Player,
    RoundFlags,
    Skills,
    Team,
    roll_skills,
)
from pitchgrid.core.geometry import Point


class TestTeam:
    def test_opponent(self):
        assert Team.A.opponent is Team.B
        assert Team.B.opponent is Team.A

    def test_index(self):
        assert Team.A.index == 0
        assert Team.B.index == 1


class TestRollSkills:
    """Tests for the skill budget split."""

    @pytest.mark.parametrize("seed", range(50))
    def test_sum_is_budget(self, seed):
        skills = roll_skills(random.Random(seed))
        assert skills.total == 15

    @pytest.mark.parametrize("seed", range(50))
    def test_every_skill_at_least_one(self, seed):
        skills = roll_skills(random.Random(seed))
        assert skills.speed >= 1
        assert skills.dribble >= 1
        assert skills.kick >= 1
        assert skills.speed <= 10

    def test_custom_budget(self):
        skills = roll_skills(random.Random(3), budget=20, skill_max=10)
        assert skills.total == 20

    def test_same_seed_same_skills(self):
        assert roll_skills(random.Random(99)) == roll_skills(random.Random(99))

    def test_kick_range_doubles_kick(self):
        assert Skills(speed=5, dribble=5, kick=5).kick_range == 10


class TestRoundFlags:
    def test_reset_clears_everything(self):
        flags = RoundFlags(reached_ball=True, kicked=True, challenge=40)
        flags.reset()
        assert flags.reached_ball is False
        assert flags.kicked is False
        assert flags.challenge == NO_CHALLENGE


class TestBall:
    def test_starts_unassigned(self):
        assert not Ball().is_assigned

    def test_place_and_revoke(self):
        ball = Ball()
        ball.place(Point(10, 10))
        assert ball.is_assigned
        ball.revoke()
        assert ball.position is None


class TestPlayer:
    """Tests for the authoritative player and its records."""

    @pytest.fixture
    def player(self) -> Player:
        return Player(
            player_id=12,
            team=Team.A,
            skills=Skills(speed=5, dribble=4, kick=6),
            prev_pos=Point(1, 1),
            curr_pos=Point(1, 1),
        )

    def test_move_keeps_previous_position(self, player):
        player.move_to(Point(4, 3))
        assert player.prev_pos == Point(1, 1)
        assert player.curr_pos == Point(4, 3)

    def test_record_is_a_copy(self, player):
        record = player.record()
        player.move_to(Point(9, 9))
        assert record.curr_pos == Point(1, 1)

    def test_record_carries_flags_and_skills(self, player):
        player.flags.reached_ball = True
        player.flags.challenge = 24
        record = player.record()
        assert record.reached is True
        assert record.challenge == 24
        assert (record.speed, record.dribble, record.kick) == (5, 4, 6)

    def test_record_row(self, player):
        row = player.record().to_row()
        assert row["player_id"] == 12
        assert row["team"] == "A"
        assert (row["curr_x"], row["curr_y"]) == (1, 1)
        assert row["challenge"] == NO_CHALLENGE

    def test_with_position(self, player):
        moved = player.record().with_position(Point(1, 1), Point(2, 2))
        assert moved.curr_pos == Point(2, 2)
        assert moved.player_id == 12
