"""
Service layer for match runs.

Runs matches on the API's event loop and keeps their summaries in memory.
"""

import logging
from typing import Optional

from pitchgrid.api.schemas.match import (
    MatchSummary,
    PlayerStatsSchema,
    RunMatchRequest,
    ScoringPlaySchema,
)
from pitchgrid.config import MatchConfig
from pitchgrid.events import EventBus
from pitchgrid.logging import MatchLog
from pitchgrid.match import Match, MatchResult

logger = logging.getLogger(__name__)

# In-memory storage for match summaries
_matches: dict[str, MatchSummary] = {}


async def run_match(request: RunMatchRequest) -> MatchSummary:
    """Run a match to completion and store its summary."""
    config = MatchConfig(rounds=request.rounds, seed=request.seed)
    bus = EventBus()
    match_log = MatchLog()
    match_log.connect_to_event_bus(bus)

    match = Match(config, event_bus=bus, report_every=request.report_every)
    result = await match.run_async()

    summary = _build_summary(result, match_log, config)
    _matches[summary.match_id] = summary
    logger.info("Stored match %s", summary.match_id)
    return summary


def _build_summary(result: MatchResult, match_log: MatchLog, config: MatchConfig) -> MatchSummary:
    return MatchSummary(
        match_id=result.match_id,
        rounds=result.rounds_played,
        seed=config.seed,
        score_a=result.score_a,
        score_b=result.score_b,
        winner=result.winner.value if result.winner else None,
        final_ball=result.final_ball.as_tuple() if result.final_ball else None,
        messages_sent=result.messages_sent,
        scoring_plays=[
            ScoringPlaySchema(
                round_index=play.round_index,
                team=play.team.value,
                scorer_id=play.scorer_id,
                score_a_after=play.score_a_after,
                score_b_after=play.score_b_after,
            )
            for play in match_log.get_scoring_summary()
        ],
        players=[
            PlayerStatsSchema(
                player_id=s.player_id,
                team=s.team.value,
                speed=s.speed,
                dribble=s.dribble,
                kick=s.kick,
                distance=s.distance,
                reaches=s.reaches,
                possessions=s.possessions,
                passes=s.passes,
                goals=s.goals,
            )
            for s in sorted(match_log.player_stats.values(), key=lambda s: s.player_id)
        ],
    )


def get_match(match_id: str) -> Optional[MatchSummary]:
    return _matches.get(match_id)


def list_matches() -> list[str]:
    return list(_matches.keys())


def delete_match(match_id: str) -> bool:
    return _matches.pop(match_id, None) is not None
