"""Tests for kick resolution."""

import random

import pytest

from pitchgrid.config import MatchConfig
from pitchgrid.core.entities import Team
from pitchgrid.core.geometry import Point, distance
from pitchgrid.policies.kick import (
    KickKind,
    attacks_right,
    goal_posts,
    resolve_kick,
    scoring_direction,
)


class MaxRandom(random.Random):
    """Always spends the whole budget on the horizontal axis."""

    def randint(self, a, b):
        return b


class MinRandom(random.Random):
    """Always spends the whole budget on the vertical axis."""

    def randint(self, a, b):
        return a


@pytest.fixture
def pitch() -> MatchConfig:
    return MatchConfig()


def kick(pitch, kicker, kick_skill, team=Team.A, teammates=None, round_index=0, rng=None, kicker_id=12):
    return resolve_kick(
        kicker_id=kicker_id,
        kicker=kicker,
        kick=kick_skill,
        team=team,
        ball=kicker,
        teammates=teammates or {},
        round_index=round_index,
        config=pitch,
        rng=rng or random.Random(0),
    )


class TestAttackingDirection:
    def test_team_a_attacks_right_first_half(self, pitch):
        assert attacks_right(Team.A, 0, pitch)
        assert not attacks_right(Team.B, 0, pitch)

    def test_sides_switch_at_half_time(self, pitch):
        assert not attacks_right(Team.A, pitch.half_time_round, pitch)
        assert attacks_right(Team.B, pitch.half_time_round, pitch)
        assert attacks_right(Team.A, pitch.half_time_round - 1, pitch)

    def test_scoring_direction(self, pitch):
        assert scoring_direction(Team.A, 0, pitch) == 1
        assert scoring_direction(Team.B, 0, pitch) == -1

    def test_goal_posts(self, pitch):
        assert goal_posts(Team.A, 0, pitch) == (Point(127, 44), Point(127, 52))
        assert goal_posts(Team.B, 0, pitch) == (Point(0, 44), Point(0, 52))


class TestScore:
    def test_post_within_range_scores(self, pitch):
        decision = kick(pitch, Point(122, 46), 5)
        assert decision.kind == KickKind.SCORE
        assert decision.is_goal
        assert decision.ball == pitch.center

    def test_score_beats_pass(self, pitch):
        decision = kick(pitch, Point(122, 46), 5, teammates={13: Point(124, 46)})
        assert decision.kind == KickKind.SCORE

    def test_post_just_out_of_range(self, pitch):
        decision = kick(pitch, Point(120, 48), 5, rng=MinRandom())
        assert decision.kind != KickKind.SCORE

    def test_second_half_scores_on_the_left(self, pitch):
        decision = kick(pitch, Point(3, 50), 4, round_index=pitch.half_time_round)
        assert decision.kind == KickKind.SCORE


class TestPass:
    def test_first_teammate_nearer_goal(self, pitch):
        teammates = {
            13: Point(55, 48),   # in range but further from goal
            14: Point(66, 48),
            15: Point(65, 48),
        }
        decision = kick(pitch, Point(60, 48), 5, teammates=teammates)
        assert decision.kind == KickKind.PASS
        assert decision.target_id == 14
        assert decision.ball == Point(66, 48)

    def test_teammate_out_of_range_ignored(self, pitch):
        decision = kick(pitch, Point(60, 48), 2, teammates={13: Point(70, 48)}, rng=MinRandom())
        assert decision.kind == KickKind.ADVANCE

    def test_kicker_is_never_its_own_target(self, pitch):
        decision = kick(pitch, Point(60, 48), 5, teammates={12: Point(61, 48)}, rng=MinRandom())
        assert decision.kind == KickKind.ADVANCE


class TestAdvance:
    @pytest.mark.parametrize("seed", range(20))
    def test_advance_spends_kick_range(self, pitch, seed):
        start = Point(20, 20)
        decision = kick(pitch, start, 3, rng=random.Random(seed))
        assert decision.kind == KickKind.ADVANCE
        assert distance(start, decision.ball) == 6
        assert decision.ball.x >= start.x
        assert decision.ball.y >= start.y

    def test_team_b_advances_left(self, pitch):
        decision = kick(pitch, Point(80, 80), 4, team=Team.B, rng=MaxRandom(), kicker_id=23)
        assert decision.ball == Point(72, 80)

    def test_vertical_moves_toward_goal_row(self, pitch):
        decision = kick(pitch, Point(40, 90), 3, rng=MinRandom())
        assert decision.ball == Point(40, 84)

    def test_out_of_bounds_resets_to_center(self, pitch):
        decision = kick(pitch, Point(126, 2), 10, rng=MaxRandom())
        assert decision.kind == KickKind.RESET
        assert decision.ball == pitch.center
        assert not decision.is_goal
