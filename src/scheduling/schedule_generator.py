"""
Schedule Generator

Generates complete 18-week regular season schedules for a 32-team league
(2 conferences x 4 divisions x 4 teams):
- 17 games per team, 272 games total, one bye week per team
- Divisional opponents twice (home and away)
- Rotating same-conference division, same-named other-conference division,
  same-place conference finishers and a 17th inter-conference game
- Thursday, Sunday and Monday night prime-time slots

The 272 games are first laid out as 17 perfect-matching rounds (every team
plays once per round). A bounded backtracking search then pulls 16 disjoint
non-division games out of the rounds placed in the bye window; those teams
sit out that week and their games form one extra full week. Slot assignment
runs last, week by week.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Set, Tuple
import logging
import random

from shared.team import LeagueStructure, Team
from .config import ScheduleConfig
from .models import (
    GameType,
    LeagueSchedule,
    ScheduledGame,
    SLOT_DAYS,
    SLOT_ORDER,
    TimeSlot,
    WeekSchedule,
    make_game_id,
)
from .schedule_exceptions import ScheduleConfigurationError, ScheduleGenerationError


@dataclass(frozen=True)
class _Pairing:
    """A matchup before it is placed on a week."""
    home_team_id: str
    away_team_id: str
    game_type: GameType

    @property
    def team_ids(self) -> Tuple[str, str]:
        return (self.home_team_id, self.away_team_id)


class _SearchExhausted(Exception):
    """Node budget for one bye search attempt ran out."""


class _SlotsExhausted(Exception):
    """No game left that may take a prime-time slot."""

    def __init__(self, slot: TimeSlot, week: int):
        super().__init__(slot, week)
        self.slot = slot
        self.week = week


class ScheduleGenerator:
    """
    Builds a LeagueSchedule that satisfies the league matchup formula.

    Division indexes follow North, South, East, West. Conference 0 is the
    alphabetically first conference.
    """

    TOTAL_WEEKS = 18
    GAMES_PER_TEAM = 17
    CONFERENCES = 2
    DIVISIONS_PER_CONFERENCE = 4
    TEAMS_PER_DIVISION = 4

    # Same-conference division played in full (North<->South, East<->West)
    ROTATING_DIVISION = {0: 1, 1: 0, 2: 3, 3: 2}

    # 17th game: conference 0 division -> conference 1 division
    # (N<->S, S<->E, E<->W, W<->N)
    SEVENTEENTH_GAME_DIVISION = {0: 1, 1: 2, 2: 3, 3: 0}

    # Same-place conference opponents: two matchings over the remaining divisions
    CONFERENCE_ROUNDS = (((0, 2), (1, 3)), ((0, 3), (1, 2)))

    # Host division for each same-place pairing; orients the N-E-S-W cycle so
    # every team gets one home and one away game
    CONFERENCE_HOSTS = {(0, 2): 0, (1, 2): 2, (1, 3): 1, (0, 3): 3}

    # Division round-robin matchings over places
    DIVISION_MATCHINGS = (((0, 1), (2, 3)), ((0, 2), (1, 3)), ((0, 3), (1, 2)))

    def __init__(self, teams: Sequence[Team], config: Optional[ScheduleConfig] = None, logger: logging.Logger = None):
        """
        Initialize schedule generator.

        Args:
            teams: All league teams
            config: Default configuration for generate_schedule()
            logger: Optional logger for tracking generation progress
        """
        self.teams = list(teams)
        self.config = config
        self.league = LeagueStructure(self.teams)
        self.logger = logger or logging.getLogger(__name__)

    # ==================== Public API ====================

    def generate_schedule(self, config: Optional[ScheduleConfig] = None) -> LeagueSchedule:
        """
        Generate a complete regular season schedule.

        Args:
            config: Generation parameters; falls back to the constructor config

        Returns:
            LeagueSchedule with 18 weeks

        Raises:
            ScheduleConfigurationError: config fails validation
            ScheduleGenerationError: league shape unsupported or constraints exhausted
        """
        config = config or self.config
        if config is None:
            raise ScheduleConfigurationError(["No ScheduleConfig provided"])

        valid, errors = config.validate()
        if not valid:
            raise ScheduleConfigurationError(errors, context_dict={"season": config.season_year})

        if not self.league.is_standard_shape(
            self.CONFERENCES, self.DIVISIONS_PER_CONFERENCE, self.TEAMS_PER_DIVISION
        ):
            raise ScheduleGenerationError(
                f"League must be {self.CONFERENCES} conferences x {self.DIVISIONS_PER_CONFERENCE} "
                f"divisions x {self.TEAMS_PER_DIVISION} teams, got {len(self.teams)} teams",
                season=config.season_year,
            )

        rng = random.Random(config.seed)
        self.logger.info(f"Generating {config.season_year} regular season schedule (seed={config.seed})")

        grid = self._build_team_grid(config, rng)
        rounds = self._build_rounds(grid, config.season_year, rng)
        week_pairings, bye_map = self._assign_byes(rounds, config, rng)
        weeks = self._assign_time_slots(week_pairings, bye_map, config, rng)

        schedule = LeagueSchedule(
            season=config.season_year,
            weeks=tuple(weeks),
            generated_at=datetime.now().isoformat(),
        )

        self.logger.info(
            f"Schedule generated: {schedule.total_weeks} weeks, {schedule.total_games} games"
        )
        return schedule

    # ==================== Matchup Formula ====================

    def _build_team_grid(self, config: ScheduleConfig, rng: random.Random) -> List[List[List[str]]]:
        """
        Arrange teams as grid[conference][division][place].

        Place is the prior-season finish used for same-place matchups.
        """
        grid: List[List[List[str]]] = []
        previous = config.previous_standings or {}

        for conference in self.league.conferences:
            divisions = []
            for division in self.league.divisions_in(conference):
                team_ids = self.league.division_teams(division)
                if division in previous:
                    ordered = [t for t in previous[division] if t in team_ids]
                    ordered += [t for t in team_ids if t not in ordered]
                    team_ids = ordered
                elif config.randomize_standings:
                    rng.shuffle(team_ids)
                divisions.append(team_ids)
            grid.append(divisions)

        return grid

    def _build_rounds(self, grid: List[List[List[str]]], season: int, rng: random.Random) -> List[List[_Pairing]]:
        """Lay out all 272 games as 17 rounds in which every team plays once."""
        rounds: List[List[_Pairing]] = []
        parity = season % 2

        # Division games: 3 matchings, two legs with home swapped
        for matching in self.DIVISION_MATCHINGS:
            first_leg: List[_Pairing] = []
            second_leg: List[_Pairing] = []
            for conference in grid:
                for division in conference:
                    for p, q in matching:
                        home, away = division[p], division[q]
                        if rng.random() < 0.5:
                            home, away = away, home
                        first_leg.append(_Pairing(home, away, GameType.DIVISION))
                        second_leg.append(_Pairing(away, home, GameType.DIVISION))
            rounds.append(first_leg)
            rounds.append(second_leg)

        # Rotating same-conference division: full 4x4, host alternates by offset
        for k in range(self.TEAMS_PER_DIVISION):
            pairings = []
            for conference in grid:
                for d in (0, 2):
                    partner = self.ROTATING_DIVISION[d]
                    for p in range(self.TEAMS_PER_DIVISION):
                        a = conference[d][p]
                        b = conference[partner][(p + k) % self.TEAMS_PER_DIVISION]
                        if (k + parity) % 2 == 0:
                            pairings.append(_Pairing(a, b, GameType.ROTATING))
                        else:
                            pairings.append(_Pairing(b, a, GameType.ROTATING))
            rounds.append(pairings)

        # Same-named division in the other conference: full 4x4
        for k in range(self.TEAMS_PER_DIVISION):
            pairings = []
            for d in range(self.DIVISIONS_PER_CONFERENCE):
                for p in range(self.TEAMS_PER_DIVISION):
                    a = grid[0][d][p]
                    b = grid[1][d][(p + k) % self.TEAMS_PER_DIVISION]
                    if (k + parity) % 2 == 0:
                        pairings.append(_Pairing(a, b, GameType.INTER_CONFERENCE))
                    else:
                        pairings.append(_Pairing(b, a, GameType.INTER_CONFERENCE))
            rounds.append(pairings)

        # Same-place finishers of the two remaining same-conference divisions
        for matching in self.CONFERENCE_ROUNDS:
            pairings = []
            for conference in grid:
                for d, e in matching:
                    host = self.CONFERENCE_HOSTS[(d, e)]
                    guest = e if host == d else d
                    for p in range(self.TEAMS_PER_DIVISION):
                        home, away = conference[host][p], conference[guest][p]
                        if p % 2 == 1:
                            home, away = away, home
                        pairings.append(_Pairing(home, away, GameType.CONFERENCE))
            rounds.append(pairings)

        # 17th game: same-place finisher of a fixed other-conference division
        pairings = []
        for d in range(self.DIVISIONS_PER_CONFERENCE):
            other = self.SEVENTEENTH_GAME_DIVISION[d]
            for p in range(self.TEAMS_PER_DIVISION):
                a = grid[0][d][p]
                b = grid[1][other][p]
                if (d + p + parity) % 2 == 0:
                    pairings.append(_Pairing(a, b, GameType.INTER_CONFERENCE))
                else:
                    pairings.append(_Pairing(b, a, GameType.INTER_CONFERENCE))
        rounds.append(pairings)

        self.logger.debug(f"Built {len(rounds)} matchup rounds, {sum(len(r) for r in rounds)} games")
        return rounds

    # ==================== Bye Weeks ====================

    def _assign_byes(
        self,
        rounds: List[List[_Pairing]],
        config: ScheduleConfig,
        rng: random.Random
    ) -> Tuple[Dict[int, List[_Pairing]], Dict[int, List[str]]]:
        """
        Place rounds on weeks and carve out one bye per team.

        Returns:
            (week -> pairings, week -> bye team ids)
        """
        bye_config = config.bye_week
        bye_weeks = bye_config.weeks
        candidates = [i for i, r in enumerate(rounds) if r[0].game_type != GameType.DIVISION]

        if len(bye_weeks) > len(candidates):
            raise ScheduleGenerationError(
                f"Bye window has {len(bye_weeks)} weeks but only {len(candidates)} "
                f"non-division rounds can host byes",
                season=config.season_year,
            )

        cap = bye_config.max_teams_per_week // 2
        minimum = bye_config.min_teams_per_week // 2
        team_ids = sorted(self.league.teams)

        for attempt in range(1, config.max_retries + 1):
            chosen = rng.sample(candidates, len(bye_weeks))
            try:
                removed = self._search_byes(rounds, chosen, team_ids, cap, minimum,
                                            config.max_search_nodes, rng)
            except _SearchExhausted:
                removed = None

            if removed is None:
                self.logger.debug(f"Bye search attempt {attempt} failed, retrying")
                continue

            self.logger.info(f"Bye weeks assigned on attempt {attempt}")
            return self._place_rounds(rounds, chosen, removed, bye_weeks, config, rng)

        raise ScheduleGenerationError(
            f"Could not assign bye weeks after {config.max_retries} attempts",
            season=config.season_year,
            attempts=config.max_retries,
        )

    def _search_byes(
        self,
        rounds: List[List[_Pairing]],
        chosen: List[int],
        team_ids: List[str],
        cap: int,
        minimum: int,
        budget: int,
        rng: random.Random
    ) -> Optional[Dict[int, List[_Pairing]]]:
        """
        Backtracking search for 16 disjoint games covering every team once.

        Games come only from the chosen rounds, at most ``cap`` and at least
        ``minimum`` per round, and division rivals never share a bye week.
        The most constrained uncovered team is expanded first.
        """
        game_of: Dict[int, Dict[str, _Pairing]] = {}
        for r in chosen:
            game_of[r] = {}
            for pairing in rounds[r]:
                game_of[r][pairing.home_team_id] = pairing
                game_of[r][pairing.away_team_id] = pairing

        uncovered: Set[str] = set(team_ids)
        counts = {r: 0 for r in chosen}
        resting_divisions: Set[Tuple[str, int]] = set()
        picked: Dict[int, List[_Pairing]] = {r: [] for r in chosen}
        nodes = 0

        def options(team_id: str) -> List[Tuple[int, _Pairing]]:
            available = []
            for r in chosen:
                if counts[r] >= cap:
                    continue
                pairing = game_of[r][team_id]
                other = pairing.away_team_id if pairing.home_team_id == team_id else pairing.home_team_id
                if other not in uncovered:
                    continue
                if (self.league.division_of(team_id), r) in resting_divisions:
                    continue
                if (self.league.division_of(other), r) in resting_divisions:
                    continue
                available.append((r, pairing))
            return available

        def search() -> bool:
            nonlocal nodes
            if not uncovered:
                return all(counts[r] >= minimum for r in chosen)

            nodes += 1
            if nodes > budget:
                raise _SearchExhausted()

            deficit = sum(max(0, minimum - counts[r]) for r in chosen)
            if deficit > len(uncovered) // 2:
                return False

            team_id = min(uncovered, key=lambda t: (len(options(t)), t))
            choices = options(team_id)
            rng.shuffle(choices)
            choices.sort(key=lambda choice: counts[choice[0]])

            for r, pairing in choices:
                home, away = pairing.team_ids
                uncovered.discard(home)
                uncovered.discard(away)
                counts[r] += 1
                resting_divisions.add((self.league.division_of(home), r))
                resting_divisions.add((self.league.division_of(away), r))
                picked[r].append(pairing)

                if search():
                    return True

                picked[r].pop()
                resting_divisions.discard((self.league.division_of(home), r))
                resting_divisions.discard((self.league.division_of(away), r))
                counts[r] -= 1
                uncovered.add(home)
                uncovered.add(away)

            return False

        if search():
            return picked
        return None

    def _place_rounds(
        self,
        rounds: List[List[_Pairing]],
        chosen: List[int],
        removed: Dict[int, List[_Pairing]],
        bye_weeks: List[int],
        config: ScheduleConfig,
        rng: random.Random
    ) -> Tuple[Dict[int, List[_Pairing]], Dict[int, List[str]]]:
        """Map rounds onto weeks: reduced rounds in the bye window, the rest elsewhere."""
        week_pairings: Dict[int, List[_Pairing]] = {}
        bye_map: Dict[int, List[str]] = {}

        bye_rounds = list(chosen)
        rng.shuffle(bye_rounds)
        for week, r in zip(bye_weeks, bye_rounds):
            taken = set(removed[r])
            week_pairings[week] = [p for p in rounds[r] if p not in taken]
            bye_map[week] = sorted(t for p in removed[r] for t in p.team_ids)

        extra_round = [p for r in chosen for p in removed[r]]
        full_rounds = [rounds[i] for i in range(len(rounds)) if i not in set(chosen)]
        full_rounds.append(extra_round)
        rng.shuffle(full_rounds)

        open_weeks = [w for w in range(1, config.total_weeks + 1) if w not in bye_map]
        for week, pairings in zip(open_weeks, full_rounds):
            week_pairings[week] = list(pairings)
            bye_map[week] = []

        return week_pairings, bye_map

    # ==================== Time Slots ====================

    def _assign_time_slots(
        self,
        week_pairings: Dict[int, List[_Pairing]],
        bye_map: Dict[int, List[str]],
        config: ScheduleConfig,
        rng: random.Random
    ) -> List[WeekSchedule]:
        """
        Give each week its prime-time games and Sunday early/late windows.

        The greedy pass can paint itself into a corner late in the season when
        per-team caps run out. Each retry redraws the random score bonus.
        """
        failure = None
        for attempt in range(1, config.max_retries + 1):
            try:
                weeks = self._slot_attempt(week_pairings, bye_map, config, rng)
            except _SlotsExhausted as e:
                failure = e
                self.logger.debug(
                    f"Time slot attempt {attempt} stuck on {e.slot.value} in week {e.week}, retrying"
                )
                continue
            if attempt > 1:
                self.logger.info(f"Time slots assigned on attempt {attempt}")
            return weeks

        raise ScheduleGenerationError(
            f"No eligible game for {failure.slot.value} slot after {config.max_retries} attempts",
            season=config.season_year,
            week=failure.week,
            attempts=config.max_retries,
        )

    def _slot_attempt(
        self,
        week_pairings: Dict[int, List[_Pairing]],
        bye_map: Dict[int, List[str]],
        config: ScheduleConfig,
        rng: random.Random
    ) -> List[WeekSchedule]:
        """One greedy pass over all weeks; raises _SlotsExhausted on a dead end."""
        primetime = config.primetime
        primetime_count: Dict[str, int] = {t: 0 for t in self.league.teams}
        tnf_count: Dict[str, int] = {t: 0 for t in self.league.teams}
        previous_mnf: Set[str] = set()
        weeks: List[WeekSchedule] = []

        for week in range(1, config.total_weeks + 1):
            pairings = week_pairings[week]
            scores = {id(p): self._primetime_score(p, primetime, rng) for p in pairings}
            ranked = sorted(pairings, key=lambda p: scores[id(p)], reverse=True)
            slots: Dict[int, TimeSlot] = {}

            requested = []
            if primetime.has_snf(week):
                requested.append(TimeSlot.SUNDAY_NIGHT)
            if primetime.has_mnf(week):
                requested.append(TimeSlot.MONDAY_NIGHT)
            if primetime.has_tnf(week):
                requested.append(TimeSlot.THURSDAY_NIGHT)

            for slot in requested:
                pairing = self._pick_primetime_game(
                    ranked, slots, slot, primetime_count, tnf_count, previous_mnf, primetime
                )
                if pairing is None:
                    raise _SlotsExhausted(slot, week)
                slots[id(pairing)] = slot
                for team_id in pairing.team_ids:
                    primetime_count[team_id] += 1
                    if slot == TimeSlot.THURSDAY_NIGHT:
                        tnf_count[team_id] += 1

            sunday_index = 0
            for pairing in ranked:
                if id(pairing) in slots:
                    continue
                slots[id(pairing)] = TimeSlot.LATE if sunday_index % 3 == 2 else TimeSlot.EARLY
                sunday_index += 1

            games = []
            for pairing in ranked:
                slot = slots[id(pairing)]
                games.append(ScheduledGame(
                    game_id=make_game_id(week, pairing.away_team_id, pairing.home_team_id),
                    week=week,
                    home_team_id=pairing.home_team_id,
                    away_team_id=pairing.away_team_id,
                    game_type=pairing.game_type,
                    time_slot=slot,
                    day=SLOT_DAYS[slot],
                    is_primetime=slot.is_primetime,
                ))
            games.sort(key=lambda g: SLOT_ORDER[g.time_slot])

            previous_mnf = {
                t for g in games if g.time_slot == TimeSlot.MONDAY_NIGHT for t in g.team_ids
            }
            weeks.append(WeekSchedule(week=week, games=tuple(games), bye_teams=tuple(bye_map[week])))

        return weeks

    def _primetime_score(self, pairing: _Pairing, primetime, rng: random.Random) -> float:
        """Market size * weight + division game bonus + random bonus."""
        home = self.league.teams[pairing.home_team_id]
        away = self.league.teams[pairing.away_team_id]
        score = (home.market_size + away.market_size) / 2 * primetime.market_weight
        if pairing.game_type == GameType.DIVISION:
            score += primetime.division_game_bonus
        score += rng.uniform(0, primetime.random_bonus_max)
        return score

    @staticmethod
    def _pick_primetime_game(
        ranked: List[_Pairing],
        slots: Dict[int, TimeSlot],
        slot: TimeSlot,
        primetime_count: Dict[str, int],
        tnf_count: Dict[str, int],
        previous_mnf: Set[str],
        primetime
    ) -> Optional[_Pairing]:
        for pairing in ranked:
            if id(pairing) in slots:
                continue
            if any(primetime_count[t] >= primetime.max_primetime_games for t in pairing.team_ids):
                continue
            if slot == TimeSlot.THURSDAY_NIGHT:
                if any(tnf_count[t] >= primetime.max_tnf_games for t in pairing.team_ids):
                    continue
                # Monday night to Thursday night is too short a turnaround
                if any(t in previous_mnf for t in pairing.team_ids):
                    continue
            return pairing
        return None


def generate_schedule(teams: Sequence[Team], config: ScheduleConfig, logger: logging.Logger = None) -> LeagueSchedule:
    """
    Convenience wrapper around ScheduleGenerator.

    Args:
        teams: All league teams
        config: Generation parameters

    Returns:
        Generated LeagueSchedule
    """
    return ScheduleGenerator(teams, config, logger).generate_schedule()
