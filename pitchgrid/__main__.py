"""Entry point for pitchgrid package."""

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table


def _player_table(match_log, team) -> Table:
    table = Table(title=f"Team {team.value}", show_lines=False)
    for column in ("Player", "Spd", "Dri", "Kck", "Dist", "Reached", "Won", "Passes", "Goals"):
        table.add_column(column, justify="right")
    for s in match_log.players_for(team):
        table.add_row(
            str(s.player_id), str(s.speed), str(s.dribble), str(s.kick),
            str(s.distance), str(s.reaches), str(s.possessions), str(s.passes), str(s.goals),
        )
    return table


def main() -> None:
    """Run one match from the command line."""
    parser = argparse.ArgumentParser(
        description="pitchgrid - sharded football match simulator",
        prog="pitchgrid",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=2700,
        help="Number of rounds to play (default: 2700)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible matches",
    )
    parser.add_argument(
        "--report-every",
        type=int,
        default=1,
        help="Aggregate a round report every N rounds (default: 1)",
    )
    parser.add_argument(
        "--markdown",
        type=Path,
        default=None,
        help="Write a markdown match summary to this path",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log goals (-v) or every phase (-vv)",
    )

    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    from pitchgrid.config import MatchConfig
    from pitchgrid.core.entities import Team
    from pitchgrid.events import EventBus
    from pitchgrid.logging import MarkdownMatchWriter, MatchLog
    from pitchgrid.match import Match

    console = Console()
    config = MatchConfig(rounds=args.rounds, seed=args.seed)

    bus = EventBus()
    match_log = MatchLog()
    match_log.connect_to_event_bus(bus)

    console.print(f"[bold]pitchgrid[/bold] - {config.rounds} rounds, {config.shard_count} shards")
    match = Match(config, event_bus=bus, report_every=args.report_every)
    result = match.run()

    console.print()
    console.print(f"[bold]Final Score:[/bold] A {result.score_a} - {result.score_b} B")
    if result.final_ball is not None:
        console.print(f"Ball at ({result.final_ball.x}, {result.final_ball.y})")
    console.print(f"{result.messages_sent} messages exchanged")
    console.print(_player_table(match_log, Team.A))
    console.print(_player_table(match_log, Team.B))

    if args.markdown is not None:
        MarkdownMatchWriter().write_match_summary(match_log, args.markdown)
        console.print(f"Summary written to {args.markdown}")


if __name__ == "__main__":
    main()
