"""Tests for shard ownership handoff and player agents."""

import random

import pytest

from pitchgrid.agents.player import PlayerAgent
from pitchgrid.agents.shard import FieldShard
from pitchgrid.core.entities import PlayerRecord, Team
from pitchgrid.core.geometry import Point, in_bounds
from pitchgrid.policies.kick import KickKind
from pitchgrid.runtime.barrier import RoundBarrier
from pitchgrid.runtime.messages import KickOutcome, PlayerUpdate, ShardSnapshot
from pitchgrid.runtime.transport import Network


@pytest.fixture
def wiring(config, topology):
    network = Network(topology.all_ids)
    barrier = RoundBarrier(topology.all_ids, timeout=config.barrier_timeout)
    return network, barrier


def make_shard(shard_id, config, topology, wiring) -> FieldShard:
    network, barrier = wiring
    return FieldShard(shard_id, config, topology, network, barrier, random.Random(shard_id))


def update(record: PlayerRecord) -> PlayerUpdate:
    return PlayerUpdate(record)


class TestShardBall:
    def test_center_shard_starts_with_ball(self, config, topology, wiring):
        holders = [
            sid for sid in topology.shard_ids
            if make_shard(sid, config, topology, wiring).holds_ball
        ]
        assert holders == [6]

    def test_ball_move_revokes_then_claims(self, config, topology, wiring):
        old_owner = make_shard(6, config, topology, wiring)
        new_owner = make_shard(0, config, topology, wiring)
        target = Point(5, 5)

        old_owner.apply_ball_move(target)
        new_owner.apply_ball_move(target)

        assert not old_owner.holds_ball
        assert new_owner.ball.position == target

    def test_ball_move_within_shard(self, config, topology, wiring):
        shard = make_shard(6, config, topology, wiring)
        shard.apply_ball_move(Point(70, 40))
        assert shard.ball.position == Point(70, 40)

    def test_goal_counts_for_kicker_team(self, config, topology, wiring):
        import asyncio

        shard = make_shard(6, config, topology, wiring)
        shard._kick = (14, KickOutcome(kicked=True, ball=config.center, team=Team.A, kind=KickKind.SCORE))
        asyncio.run(shard.on_ball_handoff(0))
        assert shard.score == {Team.A: 1, Team.B: 0}
        assert shard.ball.position == config.center


class TestShardPlayers:
    """Tests for the player revoke-then-claim pass."""

    def test_claims_players_inside(self, config, topology, wiring, record_factory):
        shard = make_shard(0, config, topology, wiring)
        shard.apply_player_updates({
            12: update(record_factory(12, 5, 5)),
            13: update(record_factory(13, 40, 5)),
        })
        assert set(shard.players) == {12}

    def test_revokes_player_that_left(self, config, topology, wiring, record_factory):
        shard = make_shard(0, config, topology, wiring)
        shard.apply_player_updates({12: update(record_factory(12, 5, 5))})
        shard.apply_player_updates({12: update(record_factory(12, 33, 5))})
        assert 12 not in shard.players

    def test_each_player_held_by_one_shard(self, config, topology, wiring, record_factory):
        shards = [make_shard(sid, config, topology, wiring) for sid in topology.shard_ids]
        rng = random.Random(3)
        updates = {
            pid: update(record_factory(pid, rng.randrange(128), rng.randrange(96)))
            for pid in topology.player_ids
        }
        for shard in shards:
            shard.apply_player_updates(updates)

        for pid in topology.player_ids:
            assert sum(pid in shard.players for shard in shards) == 1

    def test_aggregate(self, config, topology, wiring, record_factory):
        shard = make_shard(0, config, topology, wiring)
        snapshots = {sid: ShardSnapshot(ball=None, players=()) for sid in topology.shard_ids}
        snapshots[6] = ShardSnapshot(ball=Point(64, 48), players=(record_factory(20, 70, 40),))
        snapshots[1] = ShardSnapshot(ball=None, players=(record_factory(13, 40, 5),))

        report = shard._aggregate(3, snapshots)
        assert report.ball == Point(64, 48)
        assert report.ball_owners == (6,)
        assert [r.player_id for r in report.players] == [13, 20]
        assert report.kicker is None


class TestPlayerAgent:
    def make_player(self, pid, config, topology, wiring, **kwargs) -> PlayerAgent:
        network, barrier = wiring
        return PlayerAgent(pid, config, topology, network, barrier, random.Random(pid), **kwargs)

    def test_skills_and_start(self, config, topology, wiring):
        agent = self.make_player(12, config, topology, wiring)
        assert agent.player.skills.total == config.skill_budget
        assert in_bounds(agent.player.curr_pos, config)
        assert agent.player.team is Team.A

    def test_team_b_player(self, config, topology, wiring):
        assert self.make_player(30, config, topology, wiring).player.team is Team.B

    def test_movement_without_known_ball(self, config, topology, wiring):
        agent = self.make_player(12, config, topology, wiring, start=Point(3, 3))
        agent.on_movement(0)
        assert agent.player.curr_pos == Point(3, 3)
        assert not agent.player.flags.reached_ball

    def test_movement_reaches_nearby_ball(self, config, topology, wiring):
        agent = self.make_player(12, config, topology, wiring, start=Point(64, 47))
        agent.known_ball = Point(64, 48)
        agent.on_movement(0)
        assert agent.player.curr_pos == Point(64, 48)
        assert agent.player.prev_pos == Point(64, 47)
        assert agent.record().reached
