"""Tests for participant roles."""

import pytest

from pitchgrid.core.entities import Team
from pitchgrid.exceptions import ConfigurationError
from pitchgrid.runtime.topology import Role, Topology


class TestBuild:
    def test_block_layout(self, config):
        topology = Topology.build(config)
        assert topology.shard_ids == tuple(range(12))
        assert topology.team_a_ids == tuple(range(12, 23))
        assert topology.team_b_ids == tuple(range(23, 34))
        assert topology.all_ids == tuple(range(34))

    def test_build_validates(self, config):
        Topology.build(config).validate(config)


class TestQueries:
    def test_roles(self, topology):
        assert topology.role_of(0) == Role.SHARD
        assert topology.role_of(12) == Role.TEAM_A
        assert topology.role_of(33) == Role.TEAM_B

    def test_unknown_id(self, topology):
        with pytest.raises(KeyError):
            topology.role_of(34)

    def test_team_of(self, topology):
        assert topology.team_of(22) is Team.A
        assert topology.team_of(23) is Team.B

    def test_team_of_shard(self, topology):
        with pytest.raises(ValueError):
            topology.team_of(3)

    def test_teammates_exclude_self(self, topology):
        mates = topology.teammates_of(12)
        assert len(mates) == 10
        assert 12 not in mates
        assert all(topology.team_of(pid) is Team.A for pid in mates)


class TestFromRoles:
    """Tests for externally supplied role partitions."""

    def roles(self, config):
        topology = Topology.build(config)
        roles = {pid: Role.SHARD for pid in topology.shard_ids}
        roles.update({pid: Role.TEAM_A for pid in topology.team_a_ids})
        roles.update({pid: Role.TEAM_B for pid in topology.team_b_ids})
        return roles

    def test_matching_partition(self, config):
        assert Topology.from_roles(self.roles(config), config) == Topology.build(config)

    def test_missing_participant(self, config):
        roles = self.roles(config)
        del roles[33]
        with pytest.raises(ConfigurationError):
            Topology.from_roles(roles, config)

    def test_extra_shard(self, config):
        roles = self.roles(config)
        roles[34] = Role.SHARD
        with pytest.raises(ConfigurationError):
            Topology.from_roles(roles, config)

    def test_shard_ids_must_match_routing(self, config):
        roles = self.roles(config)
        roles[0], roles[12] = Role.TEAM_A, Role.SHARD
        with pytest.raises(ConfigurationError):
            Topology.from_roles(roles, config)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
