"""Participant bootstrap: stable ids and the three-way role partition.

Ids are assigned in blocks:
    0 .. S-1            field shards
    S .. S+P-1          team A players
    S+P .. S+2P-1       team B players
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from pitchgrid.config import MatchConfig
from pitchgrid.core.entities import Team
from pitchgrid.exceptions import ConfigurationError


class Role(str, Enum):
    """What a participant does."""
    SHARD = "shard"
    TEAM_A = "team_a"
    TEAM_B = "team_b"


@dataclass(frozen=True)
class Topology:
    """Immutable role partition shared by all participants."""
    shard_ids: tuple[int, ...]
    team_a_ids: tuple[int, ...]
    team_b_ids: tuple[int, ...]

    @classmethod
    def build(cls, config: MatchConfig) -> Topology:
        """Standard block layout for a config."""
        shards = config.shard_count
        per_team = config.players_per_team
        return cls(
            shard_ids=tuple(range(shards)),
            team_a_ids=tuple(range(shards, shards + per_team)),
            team_b_ids=tuple(range(shards + per_team, shards + 2 * per_team)),
        )

    @classmethod
    def from_roles(cls, roles: Mapping[int, Role], config: MatchConfig) -> Topology:
        """Build from an externally supplied id → role mapping, then validate."""
        topology = cls(
            shard_ids=tuple(sorted(pid for pid, role in roles.items() if role == Role.SHARD)),
            team_a_ids=tuple(sorted(pid for pid, role in roles.items() if role == Role.TEAM_A)),
            team_b_ids=tuple(sorted(pid for pid, role in roles.items() if role == Role.TEAM_B)),
        )
        topology.validate(config)
        return topology

    def validate(self, config: MatchConfig) -> None:
        """Check counts and that shard ids line up with the routing function.

        Raises:
            ConfigurationError: On any mismatch
        """
        if len(self.shard_ids) != config.shard_count:
            raise ConfigurationError(
                f"expected {config.shard_count} shards, got {len(self.shard_ids)}"
            )
        for team, ids in ((Team.A, self.team_a_ids), (Team.B, self.team_b_ids)):
            if len(ids) != config.players_per_team:
                raise ConfigurationError(
                    f"expected {config.players_per_team} players on team {team.value}, got {len(ids)}"
                )
        if self.shard_ids != tuple(range(config.shard_count)):
            raise ConfigurationError("shard ids must be 0..shard_count-1 to match shard routing")
        all_ids = self.shard_ids + self.team_a_ids + self.team_b_ids
        if len(set(all_ids)) != len(all_ids):
            raise ConfigurationError("a participant id appears in more than one role")
        if len(all_ids) != config.participant_count:
            raise ConfigurationError(
                f"expected {config.participant_count} participants, got {len(all_ids)}"
            )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def player_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self.team_a_ids + self.team_b_ids))

    @property
    def all_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self.shard_ids + self.team_a_ids + self.team_b_ids))

    def role_of(self, participant_id: int) -> Role:
        if participant_id in self.shard_ids:
            return Role.SHARD
        if participant_id in self.team_a_ids:
            return Role.TEAM_A
        if participant_id in self.team_b_ids:
            return Role.TEAM_B
        raise KeyError(participant_id)

    def team_of(self, player_id: int) -> Team:
        role = self.role_of(player_id)
        if role == Role.SHARD:
            raise ValueError(f"participant {player_id} is a shard, not a player")
        return Team.A if role == Role.TEAM_A else Team.B

    def teammates_of(self, player_id: int) -> tuple[int, ...]:
        """Same-team ids, excluding the player."""
        ids = self.team_a_ids if self.team_of(player_id) is Team.A else self.team_b_ids
        return tuple(pid for pid in ids if pid != player_id)
