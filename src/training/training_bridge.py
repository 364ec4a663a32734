"""
Training Integration Bridge

Turns finalized season events into XP grants:

- Game appearances: per box score line, graded by position against a
  baseline expectation and scaled by snap share
- Practice: healthy players of teams that played this week
- Bye week: healthy players of teams on bye
- Playoffs and awards: flat bonuses on top of game XP

The bridge never touches season state itself. The simulator calls it once a
week's results and injury updates are final and stores the grants it returns.

Usage Example:
    bridge = TrainingIntegrationBridge()
    grants = bridge.process_week(summary, teams, practice_plans, injured_ids)
"""

from typing import (
    TYPE_CHECKING, Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
)
import logging

from shared.game_result import GameResult, PlayerGameStats
from shared.team import RosterPlayer, Team
from .models import AgeProgression, PracticePlan, XPGrant, XPSource
from .player_development import DefaultPlayerDevelopment, PlayerDevelopment

if TYPE_CHECKING:
    from season.season_state import WeekSummary


OFFENSIVE_LINE = ('LT', 'LG', 'C', 'RG', 'RT')
BASELINE_GRADE = 60
OFFENSIVE_LINE_GRADE = 70


def performance_grade(line: PlayerGameStats) -> int:
    """
    Grade a box score line 0-100 against a positional baseline.

    60 is an ordinary game; production above expectation (completion rate
    over 60%, 4 yards per carry, 80% on field goals, 42-yard punts, ...)
    raises it and mistakes lower it.
    """
    grade = float(BASELINE_GRADE)
    position = line.position

    if position == 'QB':
        if line.passing_attempts > 0:
            completion_rate = line.passing_completions / line.passing_attempts
            grade += (completion_rate - 0.6) * 50
            grade += line.passing_touchdowns * 5
            grade -= line.passing_interceptions * 8
            grade += line.passing_yards / 50
    elif position == 'RB':
        if line.rushing_attempts > 0:
            grade += (line.rushing_yards / line.rushing_attempts - 4) * 8
            grade += line.rushing_touchdowns * 8
            grade += line.rushing_yards / 25
        grade += line.receptions * 2
        grade += line.receiving_touchdowns * 5
    elif position in ('WR', 'TE'):
        if line.targets > 0:
            grade += (line.receptions / line.targets - 0.6) * 30
            grade += line.receiving_yards / 15
            grade += line.receiving_touchdowns * 8
    elif position in OFFENSIVE_LINE:
        grade = float(OFFENSIVE_LINE_GRADE)
    elif position in ('DE', 'DT'):
        grade += line.sacks * 10
        grade += line.tackles * 2
    elif position in ('MLB', 'OLB'):
        grade += line.tackles * 1.5
        grade += line.sacks * 8
        grade += line.interceptions * 10
        grade += line.passes_defended * 3
    elif position in ('CB', 'FS', 'SS'):
        grade += line.interceptions * 12
        grade += line.passes_defended * 4
        grade += line.tackles
    elif position == 'K':
        if line.field_goals_attempted > 0:
            grade += (line.field_goals_made / line.field_goals_attempted - 0.8) * 50
    elif position == 'P':
        if line.punts > 0:
            grade += (line.punt_yards / line.punts - 42) * 2

    return max(0, min(100, int(round(grade))))


class TrainingIntegrationBridge:
    """
    Event-to-XP mapping between the season engine and player development.

    Attributes:
        development: PlayerDevelopment implementation doing the math
    """

    DEFAULT_PLAN = PracticePlan()

    def __init__(self, development: Optional[PlayerDevelopment] = None, logger=None):
        self.development = development or DefaultPlayerDevelopment()
        self.logger = logger or logging.getLogger(__name__)

    # ==================== Weekly ====================

    def process_week(
        self,
        summary: 'WeekSummary',
        teams: Mapping[str, Team],
        practice_plans: Optional[Mapping[str, PracticePlan]] = None,
        injured_ids: Collection[str] = ()
    ) -> List[XPGrant]:
        """
        XP for one completed regular season week.

        Args:
            summary: Finalized week (games recorded, injuries updated)
            teams: team_id -> Team with roster
            practice_plans: team_id -> weekly plan (default conditioning/normal)
            injured_ids: Players currently injured; they skip practice

        Returns:
            Grants in a fixed order: game lines, then practice, then bye
        """
        plans = practice_plans or {}
        injured = set(injured_ids)
        grants: List[XPGrant] = []

        for result in summary.games:
            grants.extend(self._game_grants(result, teams, summary.week))

        played = sorted({t for result in summary.games for t in result.team_ids})
        for team_id in played:
            grants.extend(self._practice_grants(
                teams.get(team_id), plans.get(team_id, self.DEFAULT_PLAN), injured, summary.week, bye=False
            ))

        for team_id in sorted(summary.bye_teams):
            grants.extend(self._practice_grants(
                teams.get(team_id), plans.get(team_id, self.DEFAULT_PLAN), injured, summary.week, bye=True
            ))

        self.logger.debug(
            f"Week {summary.week}: {len(grants)} XP grants, {sum(g.amount for g in grants)} XP"
        )
        return grants

    def process_playoff_round(
        self,
        results: Sequence[GameResult],
        teams: Mapping[str, Team],
        week: int
    ) -> List[XPGrant]:
        """Game XP plus the playoff game bonus for everyone who played."""
        bonus = self.development.calculate_award_xp('playoff_game')
        grants: List[XPGrant] = []

        for result in results:
            grants.extend(self._game_grants(result, teams, week))
            for line in result.player_stats:
                if not line.participated or line.team_id not in result.team_ids:
                    continue
                grants.append(XPGrant(
                    player_id=line.player_id,
                    team_id=line.team_id,
                    week=week,
                    source=XPSource.PLAYOFF_GAME,
                    amount=bonus,
                    description=f"Playoff game vs {result.opponent_of(line.team_id)}",
                ))
        return grants

    def process_season_awards(
        self,
        champion_id: Optional[str],
        teams: Mapping[str, Team],
        week: int,
        awards: Iterable[Tuple[str, str]] = ()
    ) -> List[XPGrant]:
        """
        End of season award XP.

        Args:
            champion_id: Championship winner; every rostered player gets the bonus
            teams: team_id -> Team
            week: Week the awards are handed out
            awards: (player_id, award_type) pairs such as ('p1', 'mvp')
        """
        grants: List[XPGrant] = []

        champion = teams.get(champion_id) if champion_id else None
        if champion is not None:
            amount = self.development.calculate_award_xp('championship')
            for player in champion.roster:
                grants.append(XPGrant(
                    player.player_id, champion.team_id, week, XPSource.AWARD, amount, "Championship"
                ))

        rosters = {p.player_id: team.team_id for team in teams.values() for p in team.roster}
        for player_id, award_type in awards:
            grants.append(XPGrant(
                player_id=player_id,
                team_id=rosters.get(player_id, ""),
                week=week,
                source=XPSource.AWARD,
                amount=self.development.calculate_award_xp(award_type),
                description=award_type.replace('_', ' ').title(),
            ))

        return grants

    def process_age_progression(self, teams: Mapping[str, Team]) -> Dict[str, AgeProgression]:
        """Offseason age curve for every rostered player."""
        return {
            player.player_id: self.development.calculate_age_progression(player)
            for team_id in sorted(teams)
            for player in teams[team_id].roster
        }

    # ==================== Helpers ====================

    def _game_grants(self, result: GameResult, teams: Mapping[str, Team], week: int) -> List[XPGrant]:
        grants = []
        for line in result.player_stats:
            if not line.participated or line.team_id not in result.team_ids:
                continue
            team = teams.get(line.team_id)
            player = team.get_player(line.player_id) if team else None
            won = result.winner_id == line.team_id
            amount = self.development.calculate_game_xp(player, won, performance_grade(line), line.snap_share)
            if amount <= 0:
                continue
            opponent = result.opponent_of(line.team_id)
            grants.append(XPGrant(
                player_id=line.player_id,
                team_id=line.team_id,
                week=week,
                source=XPSource.GAME,
                amount=amount,
                description=f"Game vs {opponent} - {'Win' if won else 'Loss' if result.winner_id else 'Tie'}",
            ))
        return grants

    def _practice_grants(
        self,
        team: Optional[Team],
        plan: PracticePlan,
        injured: Collection[str],
        week: int,
        bye: bool
    ) -> List[XPGrant]:
        if team is None:
            return []
        grants = []
        for player in team.roster:
            if player.player_id in injured:
                continue
            amount = self._practice_xp(player, plan, bye)
            if amount <= 0:
                continue
            grants.append(XPGrant(
                player_id=player.player_id,
                team_id=team.team_id,
                week=week,
                source=XPSource.BYE_WEEK if bye else XPSource.PRACTICE,
                amount=amount,
                description=f"{'Bye Week' if bye else 'Practice'} - {plan.focus.value} ({plan.intensity.value})",
            ))
        return grants

    def _practice_xp(self, player: RosterPlayer, plan: PracticePlan, bye: bool) -> int:
        if bye:
            return self.development.calculate_bye_week_xp(player, plan)
        return self.development.calculate_practice_xp(player, plan)
