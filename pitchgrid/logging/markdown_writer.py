"""Markdown match summary writer."""

from datetime import datetime
from pathlib import Path
from typing import TextIO

from pitchgrid.core.entities import Team
from pitchgrid.logging.match_log import MatchLog


class MarkdownMatchWriter:
    """Generates markdown match summaries."""

    def write_match_summary(self, match_log: MatchLog, output_path: Path) -> None:
        """Write the complete summary to a markdown file."""
        with open(output_path, "w") as f:
            self.write_to(f, match_log)

    def generate_summary_string(self, match_log: MatchLog) -> str:
        lines: list[str] = []
        self._header(lines, match_log)
        self._scoring(lines, match_log)
        self._team_stats(lines, match_log)
        self._player_stats(lines, match_log)
        lines.append("---")
        lines.append(f"*Generated by pitchgrid - {datetime.now().strftime('%Y-%m-%d %H:%M')}*")
        return "\n".join(lines) + "\n"

    def _header(self, lines: list[str], match_log: MatchLog) -> None:
        score_a, score_b = match_log.final_score or (
            match_log.team_stats[Team.A].goals,
            match_log.team_stats[Team.B].goals,
        )
        lines.append("# Team A vs Team B")
        lines.append("")
        lines.append(f"**Final Score:** A {score_a} - {score_b} B")
        if match_log.final_score is not None:
            result = f"Team {match_log.winner.value} wins" if match_log.winner else "Draw"
            lines.append(f"**Result:** {result}")
        lines.append(f"**Rounds logged:** {match_log.rounds_logged}")
        lines.append("")

    def _scoring(self, lines: list[str], match_log: MatchLog) -> None:
        lines.append("## Scoring Summary")
        lines.append("")
        plays = match_log.get_scoring_summary()
        if not plays:
            lines.append("*No goals*")
            lines.append("")
            return
        for play in plays:
            lines.append(
                f"- **Round {play.round_index}** - {play.team.value} goal by player "
                f"{play.scorer_id} ({play.score_a_after}-{play.score_b_after})"
            )
        lines.append("")

    def _team_stats(self, lines: list[str], match_log: MatchLog) -> None:
        a = match_log.get_team_stats(Team.A)
        b = match_log.get_team_stats(Team.B)
        lines.append("## Team Statistics")
        lines.append("")
        lines.append("| Statistic | A | B |")
        lines.append("|-----------|:---:|:---:|")
        lines.append(f"| Goals | {a.goals} | {b.goals} |")
        lines.append(f"| Possessions | {a.possessions} | {b.possessions} |")
        lines.append(f"| Passes | {a.passes} | {b.passes} |")
        lines.append(f"| Advances | {a.advances} | {b.advances} |")
        lines.append(f"| Out-of-bounds resets | {a.resets} | {b.resets} |")
        lines.append("")

    def _player_stats(self, lines: list[str], match_log: MatchLog) -> None:
        lines.append("## Player Statistics")
        lines.append("")
        for team in (Team.A, Team.B):
            lines.append(f"### Team {team.value}")
            lines.append("")
            lines.append("| Player | Spd | Dri | Kck | Dist | Reached | Won | Passes | Goals |")
            lines.append("|--------|----:|----:|----:|-----:|--------:|----:|-------:|------:|")
            for s in match_log.players_for(team):
                lines.append(
                    f"| {s.player_id} | {s.speed} | {s.dribble} | {s.kick} | {s.distance} | "
                    f"{s.reaches} | {s.possessions} | {s.passes} | {s.goals} |"
                )
            lines.append("")

    def write_to(self, f: TextIO, match_log: MatchLog) -> None:
        """Write the summary to an open stream."""
        f.write(self.generate_summary_string(match_log))
