"""
Season Simulator

Orchestrates one season from week 1 to the championship:

    NOT_STARTED --initialize_season--> REGULAR_SEASON
    REGULAR_SEASON --advance_week (x18)--> PLAYOFFS
    PLAYOFFS --advance_week (x4)--> COMPLETE

State is threaded explicitly. Every operation takes a SeasonState and returns
a new one; the input is never modified, so a failed call leaves the caller
holding the last good checkpoint and retrying means calling again with it.

Weekly processing has two phases:
1. Simulation: every game of the week goes through the game engine
   (optionally in parallel). Nothing is applied yet.
2. Application: results are applied in schedule order to standings,
   season stats, injuries, clinching and XP.

Usage Example:
    simulator = SeasonSimulator(teams, engine, SeasonSimOptions(season=2025))
    state = simulator.initialize_season(simulator.create_season_state())
    while not state.is_complete:
        state = simulator.advance_week(state)
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple
import logging
import time

from playoff_system.bracket_models import PlayoffMatchup, PlayoffRound
from playoff_system.playoff_manager import PlayoffManager, get_current_round, get_remaining_matchups
from scheduling.models import LeagueSchedule, ScheduledGame
from scheduling.schedule_generator import ScheduleGenerator
from shared.game_result import GameResult
from shared.team import Team
from standings.clinching import check_clinching
from standings.models import ClinchEvent
from standings.standings_tracker import create_initial_standings, update_standings_with_game
from season_statistics.aggregations import accumulate_game_stats, aggregate_season_stats
from season_statistics.leaderboards import StatCategory, get_all_leaders, get_season_leaders
from season_statistics.models import LeaderEntry, PlayerSeasonStats
from training.models import PracticePlan, XPGrant
from training.player_development import PlayerDevelopment
from training.training_bridge import TrainingIntegrationBridge
from .game_engine import (
    EngineError, FatalEngineError, GameEngine, GameSituation,
    home_field_modifier, scheme_matchups, weather_for
)
from .injuries import collect_new_injuries, update_injuries
from .season_constants import SeasonConstants
from .season_exceptions import InvalidTransitionError, SeasonInitializationError, SimulationError
from .season_options import SeasonSimOptions
from .season_state import SeasonPhase, SeasonState, WeekSummary


class CombineSimulator(Protocol):
    """Post-season hook (scouting combine) run once the champion is crowned."""

    def run_combine(self, season: int, teams: Mapping[str, Team]) -> Dict[str, Any]:
        ...


class SeasonSimulator:
    """
    Season state machine driving the game engine week by week.

    Attributes:
        teams: team_id -> Team
        game_engine: External GameEngine
        options: SeasonSimOptions
        bridge: TrainingIntegrationBridge for XP
        playoff_manager: PlayoffManager for bracket generation/progression
    """

    def __init__(
        self,
        teams: Sequence[Team],
        game_engine: GameEngine,
        options: SeasonSimOptions,
        player_development: Optional[PlayerDevelopment] = None,
        practice_plans: Optional[Mapping[str, PracticePlan]] = None,
        combine_simulator: Optional[CombineSimulator] = None,
        logger: logging.Logger = None
    ):
        """
        Args:
            teams: League teams with rosters (order defines default division places)
            game_engine: Engine simulating single games
            options: Season options
            player_development: XP calculator (DefaultPlayerDevelopment if None)
            practice_plans: team_id -> weekly PracticePlan
            combine_simulator: Required when options.combine_enabled
            logger: Optional logger

        Raises:
            SeasonInitializationError: Invalid options, duplicate team ids or
                combine enabled without a combine simulator
        """
        self.logger = logger or logging.getLogger(__name__)

        is_valid, errors = options.validate()
        if not is_valid:
            raise SeasonInitializationError(
                f"Invalid season options: {'; '.join(errors)}", component="options"
            )

        self.teams: Dict[str, Team] = {}
        for team in teams:
            if team.team_id in self.teams:
                raise SeasonInitializationError(f"Duplicate team id {team.team_id}", component="teams")
            self.teams[team.team_id] = team
        self._team_order: List[Team] = list(teams)

        if options.combine_enabled and combine_simulator is None:
            raise SeasonInitializationError(
                "combine_enabled requires a combine simulator", component="combine"
            )

        self.game_engine = game_engine
        self.options = options
        self.practice_plans: Dict[str, PracticePlan] = dict(practice_plans or {})
        self.combine_simulator = combine_simulator
        self.bridge = TrainingIntegrationBridge(player_development, logger=self.logger)
        self.playoff_manager = PlayoffManager(logger=self.logger)

    # ==================== State Machine ====================

    def create_season_state(self) -> SeasonState:
        """Fresh state in the NOT_STARTED phase."""
        return SeasonState(season=self.options.season)

    def initialize_season(self, state: SeasonState, schedule: Optional[LeagueSchedule] = None) -> SeasonState:
        """
        Start the regular season.

        Args:
            state: State in the NOT_STARTED phase
            schedule: Calendar to play; generated from the options if None

        Returns:
            State in REGULAR_SEASON at week 1 with zeroed standings

        Raises:
            InvalidTransitionError: Season already started
            ScheduleGenerationError: Schedule could not be generated
            SeasonInitializationError: Provided schedule references unknown teams
        """
        if state.phase != SeasonPhase.NOT_STARTED:
            raise InvalidTransitionError(state.phase.value, "initialize_season")

        if schedule is None:
            generator = ScheduleGenerator(self._team_order, self.options.schedule_config(), logger=self.logger)
            schedule = generator.generate_schedule()
        else:
            unknown = sorted({
                team_id for game in schedule.all_games() for team_id in game.team_ids
                if team_id not in self.teams
            })
            if unknown:
                raise SeasonInitializationError(
                    f"Schedule references unknown teams: {', '.join(unknown)}", component="schedule"
                )

        standings = create_initial_standings(self._team_order, state.season)

        self.logger.info(
            f"Season {state.season} initialized: {schedule.total_games} games over "
            f"{schedule.total_weeks} weeks, {len(self.teams)} teams"
        )
        return replace(
            state,
            phase=SeasonPhase.REGULAR_SEASON,
            current_week=1,
            schedule=schedule,
            standings=standings,
        )

    def advance_week(self, state: SeasonState) -> SeasonState:
        """
        Process the current week (regular season) or round (playoffs).

        Raises:
            InvalidTransitionError: Season not started or already complete
            SimulationError: A game failed; the input state is still valid
        """
        if state.phase == SeasonPhase.REGULAR_SEASON:
            return self._advance_regular_season_week(state)
        if state.phase == SeasonPhase.PLAYOFFS:
            return self._advance_playoff_round(state)
        if state.phase == SeasonPhase.NOT_STARTED:
            raise InvalidTransitionError(
                state.phase.value, "advance_week", message="Season has not been initialized"
            )
        raise InvalidTransitionError(state.phase.value, "advance_week", message="Season is already complete")

    def simulate_regular_season(self, state: SeasonState) -> SeasonState:
        """Advance until the playoffs start."""
        if state.phase != SeasonPhase.REGULAR_SEASON:
            raise InvalidTransitionError(state.phase.value, "simulate_regular_season")
        while state.phase == SeasonPhase.REGULAR_SEASON:
            state = self.advance_week(state)
        return state

    def simulate_playoffs(self, state: SeasonState) -> SeasonState:
        """Advance round by round until a champion is crowned."""
        if state.phase != SeasonPhase.PLAYOFFS:
            raise InvalidTransitionError(state.phase.value, "simulate_playoffs")
        while state.phase == SeasonPhase.PLAYOFFS:
            state = self.advance_week(state)
        return state

    def simulate_full_season(
        self,
        state: Optional[SeasonState] = None,
        schedule: Optional[LeagueSchedule] = None
    ) -> SeasonState:
        """
        Run whatever is left of a season.

        Args:
            state: Starting state (a new one when None)
            schedule: Used only when the season still needs initializing

        Returns:
            COMPLETE state
        """
        state = state or self.create_season_state()
        start = time.time()

        if state.phase == SeasonPhase.NOT_STARTED:
            state = self.initialize_season(state, schedule)
        if state.phase == SeasonPhase.REGULAR_SEASON:
            state = self.simulate_regular_season(state)
        if state.phase == SeasonPhase.PLAYOFFS:
            state = self.simulate_playoffs(state)

        self.logger.info(
            f"Season {state.season} complete in {time.time() - start:.2f}s, champion {state.champion_id}"
        )
        return state

    # ==================== Single Games ====================

    def simulate_game(self, state: SeasonState, game: ScheduledGame) -> GameResult:
        """
        Simulate one scheduled game without recording it.

        Raises:
            SimulationError: Engine failed twice or fatally
        """
        situation = self._build_situation(
            state, game.game_id, game.week, game.home_team_id, game.away_team_id,
            is_primetime=game.is_primetime,
        )
        return self._simulate_with_retry(situation)

    # ==================== Queries ====================

    def get_season_stats(self, state: SeasonState, include_playoffs: bool = False) -> Dict[str, PlayerSeasonStats]:
        """Player season totals; playoff games are folded in on request."""
        if include_playoffs:
            return aggregate_season_stats(state.completed_games)
        return dict(state.player_stats)

    def get_leaderboards(
        self,
        state: SeasonState,
        category: Optional[StatCategory] = None,
        limit: int = 10
    ) -> Dict[str, List[LeaderEntry]]:
        """Regular season leaders for one category or every category."""
        if category is not None:
            return {category.value: get_season_leaders(state.player_stats, category, limit)}
        return get_all_leaders(state.player_stats, limit)

    # ==================== Regular Season ====================

    def _advance_regular_season_week(self, state: SeasonState) -> SeasonState:
        week = state.current_week
        week_schedule = state.schedule.get_week(week)
        games = week_schedule.games if week_schedule else ()
        bye_teams = week_schedule.bye_teams if week_schedule else ()

        # PHASE 1: simulate every game; any failure aborts before state changes
        situations = [
            self._build_situation(
                state, game.game_id, week, game.home_team_id, game.away_team_id,
                is_primetime=game.is_primetime,
            )
            for game in games
        ]
        results = self._run_games(situations)

        # PHASE 2: apply in schedule order
        standings = state.standings
        player_stats: Dict[str, PlayerSeasonStats] = state.player_stats
        for result in results:
            standings = update_standings_with_game(standings, result)
            player_stats = accumulate_game_stats(player_stats, result)

        new_injuries = collect_new_injuries(results)
        injuries, recoveries = update_injuries(state.injuries, new_injuries)

        games_per_team = self._games_per_team(state.schedule)
        new_events, clinched = self._new_clinch_events(
            check_clinching(standings, week, games_per_team), state.clinched
        )

        summary = WeekSummary(
            week=week,
            phase=SeasonPhase.REGULAR_SEASON,
            games=tuple(results),
            bye_teams=tuple(bye_teams),
            new_injuries=tuple(new_injuries),
            recoveries=tuple(recoveries),
            active_injuries=tuple(injuries[pid] for pid in sorted(injuries)),
            standings_snapshot=standings,
            clinch_events=tuple(new_events),
        )
        grants = self.bridge.process_week(summary, self.teams, self.practice_plans, injured_ids=injuries.keys())
        summary = replace(summary, xp_grants=tuple(grants))

        next_state = replace(
            state,
            current_week=week + 1,
            standings=standings,
            completed_games=state.completed_games + tuple(results),
            injuries=injuries,
            player_stats=player_stats,
            history=state.history + (summary,),
            clinched=clinched,
            xp_totals=_add_xp(state.xp_totals, grants),
        )

        self.logger.info(
            f"Week {week} complete: {len(results)} games, {len(new_injuries)} injuries, "
            f"{len(recoveries)} recoveries, {len(new_events)} clinch events"
        )

        if week >= state.schedule.total_weeks:
            next_state = self._start_playoffs(next_state)
        return next_state

    def _start_playoffs(self, state: SeasonState) -> SeasonState:
        bracket = self.playoff_manager.generate_playoff_bracket(state.standings, state.current_week - 1)
        self.logger.info(f"Regular season {state.season} over, playoffs start in week {state.current_week}")
        return replace(state, phase=SeasonPhase.PLAYOFFS, playoff_bracket=bracket)

    # ==================== Playoffs ====================

    def _advance_playoff_round(self, state: SeasonState) -> SeasonState:
        week = state.current_week
        bracket = state.playoff_bracket
        playoff_round = get_current_round(bracket)
        matchups = get_remaining_matchups(bracket, playoff_round)

        situations = [self._playoff_situation(state, week, playoff_round, m) for m in matchups]
        results = self._run_games(situations)

        for matchup, result in zip(matchups, results):
            bracket = self.playoff_manager.record_playoff_result(
                bracket, matchup.matchup_id, result.winner_id, result.game_id
            )

        new_injuries = collect_new_injuries(results)
        injuries, recoveries = update_injuries(state.injuries, new_injuries)
        grants = self.bridge.process_playoff_round(results, self.teams, week)

        phase = SeasonPhase.PLAYOFFS
        combine_results = state.combine_results
        if bracket.champion_id is not None:
            phase = SeasonPhase.COMPLETE
            grants.extend(self.bridge.process_season_awards(bracket.champion_id, self.teams, week))
            if self.options.combine_enabled:
                combine_results = self.combine_simulator.run_combine(state.season, self.teams)
                self.logger.info(f"Combine complete for {state.season}")

        summary = WeekSummary(
            week=week,
            phase=SeasonPhase.PLAYOFFS,
            games=tuple(results),
            new_injuries=tuple(new_injuries),
            recoveries=tuple(recoveries),
            active_injuries=tuple(injuries[pid] for pid in sorted(injuries)),
            standings_snapshot=state.standings,
            xp_grants=tuple(grants),
            playoff_round=playoff_round.value,
        )

        self.logger.info(
            f"{playoff_round.display_name} complete: "
            + ", ".join(f"{r.away_team_id} {r.away_score} @ {r.home_team_id} {r.home_score}" for r in results)
        )

        return replace(
            state,
            phase=phase,
            current_week=week + 1,
            completed_games=state.completed_games + tuple(results),
            injuries=injuries,
            playoff_bracket=bracket,
            history=state.history + (summary,),
            xp_totals=_add_xp(state.xp_totals, grants),
            combine_results=combine_results,
        )

    def _playoff_situation(
        self,
        state: SeasonState,
        week: int,
        playoff_round: PlayoffRound,
        matchup: PlayoffMatchup
    ) -> GameSituation:
        return self._build_situation(
            state, matchup.matchup_id, week, matchup.home_team_id, matchup.away_team_id,
            is_primetime=True,
            playoff_round=playoff_round,
            neutral_site=playoff_round == PlayoffRound.CHAMPIONSHIP,
        )

    # ==================== Game Simulation ====================

    def _build_situation(
        self,
        state: SeasonState,
        game_id: str,
        week: int,
        home_team_id: str,
        away_team_id: str,
        is_primetime: bool = False,
        playoff_round: Optional[PlayoffRound] = None,
        neutral_site: bool = False
    ) -> GameSituation:
        home = self.teams[home_team_id]
        away = self.teams[away_team_id]
        is_playoff = playoff_round is not None
        unavailable = frozenset(
            pid for pid, injury in state.injuries.items()
            if injury.is_active and injury.team_id in (home_team_id, away_team_id)
        )
        return GameSituation(
            game_id=game_id,
            week=week,
            season=state.season,
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            scheme_matchups=scheme_matchups(home, away),
            weather=weather_for(home, week, game_id, self.options.seed),
            home_field_modifier=home_field_modifier(home, neutral_site),
            is_primetime=is_primetime,
            is_playoff=is_playoff,
            playoff_round=playoff_round.value if is_playoff else None,
            is_high_importance=is_playoff or week >= SeasonConstants.HIGH_IMPORTANCE_FROM_WEEK,
            unavailable_player_ids=unavailable,
        )

    def _run_games(self, situations: Sequence[GameSituation]) -> List[GameResult]:
        """Simulate games, returning results in the order given."""
        if self.options.max_workers > 1 and len(situations) > 1:
            with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
                futures = [executor.submit(self._simulate_with_retry, s) for s in situations]
                # Collected in submission order, not completion order
                return [future.result() for future in futures]
        return [self._simulate_with_retry(s) for s in situations]

    def _simulate_with_retry(self, situation: GameSituation) -> GameResult:
        """
        Call the engine, retrying a transient failure once with identical inputs.

        Raises:
            SimulationError: After the last attempt, or immediately on FatalEngineError
        """
        home_roster = self.teams[situation.home_team_id].roster
        away_roster = self.teams[situation.away_team_id].roster
        max_attempts = SeasonConstants.ENGINE_MAX_ATTEMPTS
        last_error: Optional[EngineError] = None

        for attempt in range(1, max_attempts + 1):
            try:
                result = self.game_engine.simulate(home_roster, away_roster, situation)
                return self._check_result(result, situation)
            except FatalEngineError as e:
                self.logger.error(f"Fatal engine error for {situation.game_id}: {e}")
                raise SimulationError(
                    f"Game engine failed fatally for {situation.game_id}",
                    week=situation.week,
                    game_id=situation.game_id,
                    home_team_id=situation.home_team_id,
                    away_team_id=situation.away_team_id,
                    attempts=attempt,
                    original_exception=e,
                ) from e
            except EngineError as e:
                last_error = e
                self.logger.warning(
                    f"Engine error for {situation.game_id} (attempt {attempt}/{max_attempts}): {e}"
                )

        raise SimulationError(
            f"Game {situation.game_id} could not be simulated after {max_attempts} attempts",
            week=situation.week,
            game_id=situation.game_id,
            home_team_id=situation.home_team_id,
            away_team_id=situation.away_team_id,
            attempts=max_attempts,
            original_exception=last_error,
        ) from last_error

    def _check_result(self, result: GameResult, situation: GameSituation) -> GameResult:
        """
        Reject results that do not belong to the game and stamp the context.

        Raises:
            FatalEngineError: Result for a different game or different teams
            EngineError: Playoff game ended tied
        """
        if (result.game_id != situation.game_id
                or result.home_team_id != situation.home_team_id
                or result.away_team_id != situation.away_team_id):
            raise FatalEngineError(
                f"Engine returned {result.game_id} ({result.away_team_id} @ {result.home_team_id}) "
                f"for {situation.game_id}",
                game_id=situation.game_id,
            )
        if situation.is_playoff and result.is_tie:
            raise EngineError(f"Playoff game {situation.game_id} ended tied", game_id=situation.game_id)

        return replace(
            result,
            week=situation.week,
            is_playoff=situation.is_playoff,
            playoff_round=situation.playoff_round,
            is_primetime=situation.is_primetime,
        )

    # ==================== Helpers ====================

    def _games_per_team(self, schedule: LeagueSchedule) -> int:
        if not self.teams:
            return 0
        return (2 * schedule.total_games) // len(self.teams)

    def _new_clinch_events(
        self,
        events: Iterable[ClinchEvent],
        clinched: Mapping[str, Tuple[str, ...]]
    ) -> Tuple[List[ClinchEvent], Dict[str, Tuple[str, ...]]]:
        """Keep only first-time statuses and merge them into the clinched map."""
        updated = dict(clinched)
        new_events: List[ClinchEvent] = []
        for event in events:
            settled = updated.get(event.team_id, ())
            if event.clinch_type.value in settled:
                continue
            new_events.append(event)
            updated[event.team_id] = settled + (event.clinch_type.value,)
            self.logger.info(f"Week {event.week}: {event.team_id} {event.clinch_type.value}")
        return new_events, updated


def _add_xp(totals: Mapping[str, int], grants: Iterable[XPGrant]) -> Dict[str, int]:
    updated = dict(totals)
    for grant in grants:
        updated[grant.player_id] = updated.get(grant.player_id, 0) + grant.amount
    return updated
