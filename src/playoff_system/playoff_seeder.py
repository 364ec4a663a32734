"""
Playoff Seeder

Calculates playoff seeding from a standings snapshot.
Pure calculation logic - no side effects.
Can calculate seeding at any point in the season for a playoff picture.
"""

from typing import Any, Dict, List
import logging

from standings.models import StandingsTable, TeamStanding
from standings.tiebreakers import rank_teams_with_notes
from .playoff_exceptions import InvalidSeedingError
from .seeding_models import ConferenceSeeding, PlayoffSeed, PlayoffSeeding


class PlayoffSeeder:
    """
    Calculates playoff seeding based on current standings.

    Usage:
        seeder = PlayoffSeeder()
        seeding = seeder.calculate_seeding(table, week=18)

    Seeding rules:
    - Division winners take seeds 1-4, ordered by tiebreak-resolved record
    - Best three remaining teams take seeds 5-7
    - Every ordering goes through standings.tiebreakers
    """

    SEEDS_PER_CONFERENCE = 7

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self.tiebreakers_applied: List[Dict[str, Any]] = []

    def calculate_seeding(self, table: StandingsTable, week: int = 18) -> PlayoffSeeding:
        """
        Calculate playoff seeding from standings.

        Args:
            table: Standings snapshot
            week: Week the snapshot belongs to (seeds the coin flip)

        Returns:
            PlayoffSeeding with 7 seeds per conference

        Raises:
            InvalidSeedingError: If a conference cannot fill its seeds
        """
        self.tiebreakers_applied = []

        conferences = {
            conference: self._calculate_conference_seeding(table, conference, week)
            for conference in table.conferences
        }

        self.logger.info(
            f"Calculated {table.season} seeding at week {week}: "
            + ", ".join(f"{c} #1 {s.bye_team_id}" for c, s in sorted(conferences.items()))
        )

        return PlayoffSeeding(
            season=table.season,
            week=week,
            conferences=conferences,
            tiebreakers_applied=tuple(self.tiebreakers_applied),
        )

    def _calculate_conference_seeding(
        self,
        table: StandingsTable,
        conference: str,
        week: int
    ) -> ConferenceSeeding:
        team_ids = table.conference_team_ids(conference)
        divisions = table.divisions_in(conference)

        if len(team_ids) < self.SEEDS_PER_CONFERENCE:
            raise InvalidSeedingError(
                f"Conference {conference} has {len(team_ids)} teams, "
                f"needs at least {self.SEEDS_PER_CONFERENCE}",
                conference=conference,
                team_count=len(team_ids),
            )
        if len(divisions) > self.SEEDS_PER_CONFERENCE:
            raise InvalidSeedingError(
                f"Conference {conference} has more divisions than playoff seeds",
                conference=conference,
                context_dict={"divisions": divisions},
            )

        # Step 1: Division winners
        winners = [self._rank(table, table.division_team_ids(d), week, conference)[0] for d in divisions]

        # Step 2: Order division winners (top seeds)
        winners = self._rank(table, winners, week, conference)

        # Step 3: Best remaining teams fill the wild card seeds
        remaining = [t for t in team_ids if t not in winners]
        wildcards = self._rank(table, remaining, week, conference)[:self.SEEDS_PER_CONFERENCE - len(winners)]

        seeds = tuple(
            self._create_playoff_seed(table[team_id], seed, team_id in winners)
            for seed, team_id in enumerate(winners + wildcards, start=1)
        )
        return ConferenceSeeding(conference=conference, seeds=seeds)

    def _rank(self, table: StandingsTable, team_ids: List[str], week: int, conference: str) -> List[str]:
        ordered, notes = rank_teams_with_notes(table, team_ids, week)
        for note in notes:
            self.tiebreakers_applied.append({**note, 'conference': conference})
        return ordered

    def _create_playoff_seed(self, standing: TeamStanding, seed: int, is_division_winner: bool) -> PlayoffSeed:
        return PlayoffSeed(
            seed=seed,
            team_id=standing.team_id,
            conference=standing.conference,
            division=standing.division,
            wins=standing.wins,
            losses=standing.losses,
            ties=standing.ties,
            win_percentage=standing.win_percentage,
            division_winner=is_division_winner,
            points_for=standing.points_for,
            points_against=standing.points_against,
            division_record=standing.division_record,
            conference_record=standing.conference_record,
        )
