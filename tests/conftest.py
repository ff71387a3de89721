"""Shared pytest fixtures for pitchgrid tests."""

import random

import pytest

from pitchgrid.config import MatchConfig
from pitchgrid.core.entities import PlayerRecord, Team
from pitchgrid.core.geometry import Point
from pitchgrid.runtime.topology import Topology


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def config() -> MatchConfig:
    """Full-size pitch with a short match."""
    return MatchConfig(rounds=20, seed=7, barrier_timeout=5.0)


@pytest.fixture
def long_config() -> MatchConfig:
    """Full-size pitch, long enough for goals to happen."""
    return MatchConfig(rounds=300, seed=11, barrier_timeout=5.0)


@pytest.fixture
def topology(config) -> Topology:
    return Topology.build(config)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# =============================================================================
# Record Fixtures
# =============================================================================


def make_record(player_id: int, x: int, y: int, team: Team = Team.A, **kwargs) -> PlayerRecord:
    """PlayerRecord that has just moved to (x, y)."""
    return PlayerRecord(
        player_id=player_id,
        team=team,
        prev_pos=Point(x, y),
        curr_pos=Point(x, y),
        **kwargs,
    )


@pytest.fixture
def record_factory():
    return make_record
