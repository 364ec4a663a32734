"""
Schedule Validator

Re-checks every invariant of a generated LeagueSchedule and reports each
violation found, not just the first. Used by the test suite and for
post-hoc integrity checks on loaded schedules.

Usage Example:
    from scheduling import validate_schedule

    result = validate_schedule(schedule, teams)
    if not result.valid:
        for error in result.errors:
            print(error)
"""

from collections import Counter, defaultdict
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from shared.team import LeagueStructure, Team
from shared.validation import ValidationResult, ValidationSeverity
from .config import ScheduleConfig
from .models import GameType, LeagueSchedule, TimeSlot


class ScheduleValidator:
    """
    Validates regular season schedules.

    Checks:
    - Week count and week numbering
    - Games per team and exactly one bye per team
    - No team twice in a week, no self-play, bye teams not playing
    - Bye list size matches team count minus 2x games
    - Division rivals meet once at home and once away
    - Matchup type counts per team
    - Home game balance (warning)
    - Prime-time slot distribution
    - Unique game ids
    """

    # Expected games per team for each matchup category
    EXPECTED_GAME_TYPES = {
        GameType.DIVISION: 6,
        GameType.ROTATING: 4,
        GameType.CONFERENCE: 2,
        GameType.INTER_CONFERENCE: 5,
    }

    MIN_HOME_GAMES = 8
    MAX_HOME_GAMES = 9

    def __init__(self, teams: Sequence[Team], config: Optional[ScheduleConfig] = None):
        self.league = LeagueStructure(teams)
        self.config = config
        self._logger = logging.getLogger(__name__)

    def validate_schedule(self, schedule: LeagueSchedule) -> ValidationResult:
        """
        Run all schedule checks.

        Returns:
            ValidationResult listing every violation
        """
        result = ValidationResult(valid=True)
        total_weeks = self.config.total_weeks if self.config else 18
        games_per_team = self.config.games_per_team if self.config else 17

        self._validate_weeks(schedule, result, total_weeks)
        self._validate_week_contents(schedule, result)
        self._validate_team_totals(schedule, result, games_per_team)
        self._validate_division_series(schedule, result)
        self._validate_game_types(schedule, result)
        self._validate_home_balance(schedule, result)
        self._validate_bye_window(schedule, result)
        self._validate_primetime(schedule, result)
        self._validate_game_ids(schedule, result)

        self._logger.info(
            f"Schedule validation complete: {result.total_checks} checks, "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    # ==================== Checks ====================

    def _validate_weeks(self, schedule: LeagueSchedule, result: ValidationResult, total_weeks: int):
        result.check()
        if schedule.total_weeks != total_weeks:
            result.add_error(
                ValidationSeverity.ERROR, "week_count",
                f"Schedule has {schedule.total_weeks} weeks, expected {total_weeks}",
                {"weeks": schedule.total_weeks}
            )

        result.check()
        numbers = [w.week for w in schedule.weeks]
        if numbers != list(range(1, len(numbers) + 1)):
            result.add_error(
                ValidationSeverity.ERROR, "week_numbering",
                "Weeks are not numbered consecutively from 1",
                {"weeks": numbers}
            )

    def _validate_week_contents(self, schedule: LeagueSchedule, result: ValidationResult):
        team_count = len(self.league.teams)

        for week in schedule.weeks:
            appearances: Counter = Counter()
            for game in week.games:
                result.check()
                if game.home_team_id == game.away_team_id:
                    result.add_error(
                        ValidationSeverity.ERROR, "self_play",
                        f"Team {game.home_team_id} scheduled against itself",
                        {"week": week.week, "game_id": game.game_id}
                    )
                result.check()
                if game.week != week.week:
                    result.add_error(
                        ValidationSeverity.ERROR, "week_mismatch",
                        f"Game {game.game_id} carries week {game.week} inside week {week.week}",
                        {"week": week.week, "game_id": game.game_id}
                    )
                for team_id in game.team_ids:
                    result.check()
                    if team_id not in self.league.teams:
                        result.add_error(
                            ValidationSeverity.ERROR, "unknown_team",
                            f"Unknown team {team_id} in game {game.game_id}",
                            {"week": week.week}
                        )
                    appearances[team_id] += 1

            for team_id, count in appearances.items():
                result.check()
                if count > 1:
                    result.add_error(
                        ValidationSeverity.ERROR, "double_booked",
                        f"Team {team_id} plays {count} games in week {week.week}",
                        {"week": week.week, "team_id": team_id}
                    )

            for team_id in week.bye_teams:
                result.check()
                if appearances.get(team_id):
                    result.add_error(
                        ValidationSeverity.ERROR, "bye_team_playing",
                        f"Team {team_id} is on bye in week {week.week} but also plays",
                        {"week": week.week, "team_id": team_id}
                    )

            result.check()
            expected_byes = team_count - 2 * len(week.games)
            if len(week.bye_teams) != expected_byes:
                result.add_error(
                    ValidationSeverity.ERROR, "bye_count",
                    f"Week {week.week} lists {len(week.bye_teams)} bye teams, expected {expected_byes}",
                    {"week": week.week}
                )

    def _validate_team_totals(self, schedule: LeagueSchedule, result: ValidationResult, games_per_team: int):
        for team_id in sorted(self.league.teams):
            result.check()
            games = len(schedule.games_for_team(team_id))
            if games != games_per_team:
                result.add_error(
                    ValidationSeverity.ERROR, "games_per_team",
                    f"Team {team_id} plays {games} games, expected {games_per_team}",
                    {"team_id": team_id, "games": games}
                )

            result.check()
            byes = schedule.bye_weeks_for(team_id)
            if len(byes) != 1:
                result.add_error(
                    ValidationSeverity.ERROR, "bye_weeks",
                    f"Team {team_id} has {len(byes)} bye weeks, expected 1",
                    {"team_id": team_id, "bye_weeks": byes}
                )

    def _validate_division_series(self, schedule: LeagueSchedule, result: ValidationResult):
        hosts: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        for game in schedule.all_games():
            pair = tuple(sorted(game.team_ids))
            hosts[pair].append(game.home_team_id)

        for team_id in sorted(self.league.teams):
            for rival in self.league.division_rivals(team_id):
                if rival < team_id:
                    continue
                result.check()
                pair_hosts = sorted(hosts.get((team_id, rival), []))
                if pair_hosts != sorted([team_id, rival]):
                    result.add_error(
                        ValidationSeverity.ERROR, "division_series",
                        f"Division rivals {team_id}/{rival} must meet home and away, hosts were {pair_hosts}",
                        {"teams": [team_id, rival]}
                    )

    def _validate_game_types(self, schedule: LeagueSchedule, result: ValidationResult):
        for team_id in sorted(self.league.teams):
            counts = Counter(g.game_type for g in schedule.games_for_team(team_id))
            for game_type, expected in self.EXPECTED_GAME_TYPES.items():
                result.check()
                if counts.get(game_type, 0) != expected:
                    result.add_error(
                        ValidationSeverity.ERROR, "game_types",
                        f"Team {team_id} has {counts.get(game_type, 0)} {game_type.value} games, expected {expected}",
                        {"team_id": team_id, "game_type": game_type.value}
                    )

            for game in schedule.games_for_team(team_id):
                result.check()
                opponent = game.opponent_of(team_id)
                if opponent not in self.league.teams:
                    continue
                same_division = self.league.division_of(opponent) == self.league.division_of(team_id)
                same_conference = self.league.conference_of(opponent) == self.league.conference_of(team_id)
                consistent = (
                    (game.game_type == GameType.DIVISION and same_division)
                    or (game.game_type in (GameType.ROTATING, GameType.CONFERENCE)
                        and same_conference and not same_division)
                    or (game.game_type == GameType.INTER_CONFERENCE and not same_conference)
                )
                if not consistent:
                    result.add_error(
                        ValidationSeverity.ERROR, "game_types",
                        f"Game {game.game_id} labelled {game.game_type.value} does not match team alignment",
                        {"game_id": game.game_id}
                    )

    def _validate_home_balance(self, schedule: LeagueSchedule, result: ValidationResult):
        for team_id in sorted(self.league.teams):
            result.check()
            home = sum(1 for g in schedule.games_for_team(team_id) if g.home_team_id == team_id)
            if not self.MIN_HOME_GAMES <= home <= self.MAX_HOME_GAMES:
                result.add_error(
                    ValidationSeverity.WARNING, "home_balance",
                    f"Team {team_id} has {home} home games",
                    {"team_id": team_id, "home_games": home},
                    suggestion=f"Expected {self.MIN_HOME_GAMES}-{self.MAX_HOME_GAMES}"
                )

    def _validate_bye_window(self, schedule: LeagueSchedule, result: ValidationResult):
        if self.config is None:
            return
        bye_config = self.config.bye_week
        for week in schedule.weeks:
            if not week.bye_teams:
                continue
            result.check()
            if not bye_config.start_week <= week.week <= bye_config.end_week:
                result.add_error(
                    ValidationSeverity.ERROR, "bye_window",
                    f"Byes in week {week.week} outside window {bye_config.start_week}-{bye_config.end_week}",
                    {"week": week.week, "bye_teams": list(week.bye_teams)}
                )
            result.check()
            if len(week.bye_teams) > bye_config.max_teams_per_week:
                result.add_error(
                    ValidationSeverity.ERROR, "bye_window",
                    f"Week {week.week} has {len(week.bye_teams)} teams on bye",
                    {"week": week.week}
                )

    def _validate_primetime(self, schedule: LeagueSchedule, result: ValidationResult):
        primetime = self.config.primetime if self.config else None
        for week in schedule.weeks:
            for game in week.games:
                result.check()
                if game.is_primetime != game.time_slot.is_primetime:
                    result.add_error(
                        ValidationSeverity.ERROR, "primetime",
                        f"Game {game.game_id} prime-time flag does not match slot {game.time_slot.value}",
                        {"game_id": game.game_id}
                    )

            for slot in (TimeSlot.THURSDAY_NIGHT, TimeSlot.SUNDAY_NIGHT, TimeSlot.MONDAY_NIGHT):
                result.check()
                count = len(week.games_in_slot(slot))
                if primetime is not None:
                    expected = {
                        TimeSlot.THURSDAY_NIGHT: primetime.has_tnf(week.week),
                        TimeSlot.SUNDAY_NIGHT: primetime.has_snf(week.week),
                        TimeSlot.MONDAY_NIGHT: primetime.has_mnf(week.week),
                    }[slot]
                    if count != int(expected):
                        result.add_error(
                            ValidationSeverity.ERROR, "primetime",
                            f"Week {week.week} has {count} {slot.value} games, expected {int(expected)}",
                            {"week": week.week, "slot": slot.value}
                        )
                elif count > 1:
                    result.add_error(
                        ValidationSeverity.ERROR, "primetime",
                        f"Week {week.week} has {count} {slot.value} games",
                        {"week": week.week, "slot": slot.value}
                    )

    def _validate_game_ids(self, schedule: LeagueSchedule, result: ValidationResult):
        result.check()
        ids = Counter(g.game_id for g in schedule.all_games())
        duplicates = sorted(game_id for game_id, count in ids.items() if count > 1)
        if duplicates:
            result.add_error(
                ValidationSeverity.ERROR, "game_ids",
                f"Duplicate game ids: {duplicates}",
                {"game_ids": duplicates}
            )


def validate_schedule(
    schedule: LeagueSchedule,
    teams: Sequence[Team],
    config: Optional[ScheduleConfig] = None
) -> ValidationResult:
    """Validate a schedule against the league it was generated for."""
    return ScheduleValidator(teams, config).validate_schedule(schedule)
