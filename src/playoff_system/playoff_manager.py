"""
Playoff Manager

Pure logic for playoff bracket generation and progression.
Implements playoff rules including re-seeding after each round.

Usage Example:
    manager = PlayoffManager()
    bracket = manager.generate_playoff_bracket(final_standings)

    for matchup in get_remaining_matchups(bracket):
        bracket = manager.record_playoff_result(bracket, matchup.matchup_id, winner_id)
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from standings.models import StandingsTable
from .bracket_models import PlayoffBracket, PlayoffMatchup, PlayoffRound, ROUND_ORDER
from .playoff_exceptions import InvalidMatchupError
from .playoff_seeder import PlayoffSeeder
from .seeding_models import PlayoffSeed


def _seed_order(seed: PlayoffSeed) -> Tuple:
    """Better seed first; cross-conference ties fall back to record."""
    return (seed.seed, -seed.win_percentage, -seed.point_differential, seed.team_id)


def reseed(remaining_winners: Sequence[PlayoffSeed]) -> List[Tuple[PlayoffSeed, PlayoffSeed]]:
    """
    Pair surviving teams for the next round.

    Highest remaining seed plays the lowest, next highest the next lowest,
    and so on. Computed fresh from the survivors every round; nothing is
    carried over from the original bracket shape.

    Args:
        remaining_winners: Seeds still alive (bye teams included)

    Returns:
        (higher seed, lower seed) pairs, higher seed hosting
    """
    ordered = sorted(remaining_winners, key=_seed_order)
    half = len(ordered) // 2
    return [(ordered[i], ordered[len(ordered) - 1 - i]) for i in range(half)]


def is_round_complete(bracket: PlayoffBracket, playoff_round: PlayoffRound) -> bool:
    """A round is complete when it exists and every matchup has a winner."""
    matchups = bracket.matchups(playoff_round)
    return bool(matchups) and all(m.is_resolved for m in matchups)


def get_remaining_matchups(
    bracket: PlayoffBracket,
    playoff_round: Optional[PlayoffRound] = None
) -> List[PlayoffMatchup]:
    """Unresolved matchups of one round, or of the whole bracket."""
    rounds = [playoff_round] if playoff_round is not None else list(ROUND_ORDER)
    return [m for r in rounds for m in bracket.matchups(r) if not m.is_resolved]


def get_current_round(bracket: PlayoffBracket) -> Optional[PlayoffRound]:
    """Round currently being played, None once a champion exists."""
    if bracket.is_complete:
        return None
    for playoff_round in ROUND_ORDER:
        if not is_round_complete(bracket, playoff_round):
            return playoff_round
    return None


def get_eliminated_teams(bracket: PlayoffBracket) -> List[str]:
    """Losers of every resolved matchup, in the order they were knocked out."""
    return [m.loser_id for m in bracket.all_matchups() if m.is_resolved]


def make_matchup_id(
    season: int,
    playoff_round: PlayoffRound,
    conference: Optional[str],
    higher: PlayoffSeed,
    lower: PlayoffSeed
) -> str:
    if playoff_round == PlayoffRound.CHAMPIONSHIP:
        return f"{season}-{playoff_round.code}"
    return f"{season}-{playoff_round.code}-{conference}-{higher.seed}v{lower.seed}"


class PlayoffManager:
    """
    Manages playoff bracket generation and progression.

    This is pure business logic - no side effects, no database access.
    Takes standings/results as input, returns brackets as output.

    Playoff rules:
    - Wild Card: (2)v(7), (3)v(6), (4)v(5), #1 gets bye
    - Divisional: #1 plays LOWEST remaining seed (re-seeding)
    - Conference: Winners of divisional games
    - Championship: Conference champions, better seed hosts
    """

    def __init__(self, seeder: Optional[PlayoffSeeder] = None, logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self.seeder = seeder or PlayoffSeeder(logger=self.logger)

    def generate_playoff_bracket(self, table: StandingsTable, week: int = 18) -> PlayoffBracket:
        """
        Seed the playoffs from final standings and build the wild card round.

        Args:
            table: Final regular season standings
            week: Week the standings belong to

        Returns:
            PlayoffBracket with seeding, byes and wild card matchups

        Raises:
            InvalidSeedingError: If a conference cannot fill its seeds
        """
        seeding = self.seeder.calculate_seeding(table, week)

        seeds_by_conference = {c: s.seeds for c, s in seeding.conferences.items()}
        byes = {c: s.bye_team_id for c, s in seeding.conferences.items()}

        wild_card: List[PlayoffMatchup] = []
        for conference in sorted(seeds_by_conference):
            # #1 seed sits out; the rest pair 2v7, 3v6, 4v5
            wild_card.extend(self._build_matchups(
                table.season, PlayoffRound.WILD_CARD, conference, seeds_by_conference[conference][1:]
            ))

        bracket = PlayoffBracket(
            season=table.season,
            seeding=seeds_by_conference,
            byes=byes,
            rounds={PlayoffRound.WILD_CARD: tuple(wild_card)},
        )

        self.logger.info(
            f"Generated {table.season} playoff bracket: {len(wild_card)} wild card games, "
            f"byes {sorted(byes.values())}"
        )
        return bracket

    def record_playoff_result(
        self,
        bracket: PlayoffBracket,
        matchup_id: str,
        winner_id: str,
        game_id: Optional[str] = None
    ) -> PlayoffBracket:
        """
        Record the winner of one matchup.

        When the record completes a round, the next round is built by
        re-seeding that round's winners. Recording the championship sets
        the champion.

        Args:
            bracket: Current bracket
            matchup_id: Matchup being decided
            winner_id: Winning team id
            game_id: Optional id of the game that decided it

        Returns:
            New PlayoffBracket

        Raises:
            InvalidMatchupError: Unknown matchup, already resolved, or winner
                not a participant. The bracket passed in is unchanged.
        """
        matchup = bracket.get_matchup(matchup_id)
        if matchup is None:
            raise InvalidMatchupError(matchup_id, "matchup does not exist", winner_id=winner_id)
        if matchup.is_resolved:
            raise InvalidMatchupError(
                matchup_id, f"already resolved (winner {matchup.winner_id})",
                winner_id=winner_id, participants=list(matchup.participants)
            )
        if winner_id not in matchup.participants:
            raise InvalidMatchupError(
                matchup_id, f"{winner_id} is not a participant",
                winner_id=winner_id, participants=list(matchup.participants)
            )

        rounds = dict(bracket.rounds)
        rounds[matchup.round] = tuple(
            m.with_result(winner_id, game_id) if m.matchup_id == matchup_id else m
            for m in bracket.matchups(matchup.round)
        )
        updated = replace(bracket, rounds=rounds)
        self.logger.debug(f"Recorded {matchup_id}: {winner_id} advances")

        if is_round_complete(updated, matchup.round):
            updated = self._advance(updated, matchup.round)

        return updated

    # ========== Helper Methods ==========

    def _advance(self, bracket: PlayoffBracket, completed: PlayoffRound) -> PlayoffBracket:
        """Build the round after ``completed`` from its winners."""
        winners = [m.winner_seed for m in bracket.matchups(completed)]

        if completed == PlayoffRound.CHAMPIONSHIP:
            champion = winners[0].team_id
            self.logger.info(f"{bracket.season} champion: {champion}")
            return replace(bracket, champion_id=champion)

        next_round = completed.next_round
        matchups: List[PlayoffMatchup] = []

        if next_round == PlayoffRound.CHAMPIONSHIP:
            matchups.extend(self._build_matchups(bracket.season, next_round, None, winners))
        else:
            by_conference: Dict[str, List[PlayoffSeed]] = {}
            for seed in winners:
                by_conference.setdefault(seed.conference, []).append(seed)
            if completed == PlayoffRound.WILD_CARD:
                for conference, team_id in bracket.byes.items():
                    by_conference.setdefault(conference, []).append(bracket.seed_for(team_id))
            for conference in sorted(by_conference):
                matchups.extend(self._build_matchups(
                    bracket.season, next_round, conference, by_conference[conference]
                ))

        rounds = dict(bracket.rounds)
        rounds[next_round] = tuple(matchups)
        self.logger.info(
            f"{completed.display_name} complete, {next_round.display_name}: "
            + ", ".join(m.matchup_string for m in matchups)
        )
        return replace(bracket, rounds=rounds)

    def _build_matchups(
        self,
        season: int,
        playoff_round: PlayoffRound,
        conference: Optional[str],
        survivors: Sequence[PlayoffSeed]
    ) -> List[PlayoffMatchup]:
        return [
            PlayoffMatchup(
                matchup_id=make_matchup_id(season, playoff_round, conference, higher, lower),
                round=playoff_round,
                conference=conference,
                higher_seed=higher,
                lower_seed=lower,
            )
            for higher, lower in reseed(survivors)
        ]


def generate_playoff_bracket(table: StandingsTable, week: int = 18) -> PlayoffBracket:
    """Convenience wrapper around PlayoffManager.generate_playoff_bracket."""
    return PlayoffManager().generate_playoff_bracket(table, week)


def record_playoff_result(
    bracket: PlayoffBracket,
    matchup_id: str,
    winner_id: str,
    game_id: Optional[str] = None
) -> PlayoffBracket:
    """Convenience wrapper around PlayoffManager.record_playoff_result."""
    return PlayoffManager().record_playoff_result(bracket, matchup_id, winner_id, game_id)
