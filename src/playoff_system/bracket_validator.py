"""
Playoff Bracket Validator

Consistency checks for a PlayoffBracket. Every violation is collected into
a ValidationResult; the validator never raises mid-check.

Usage Example:
    from playoff_system import validate_bracket

    result = validate_bracket(bracket)
    if not result.valid:
        print(f"Validation failed: {len(result.errors)} errors")
        for error in result.errors:
            print(f"  {error}")
"""

from collections import Counter
from typing import Set
import logging

from shared.validation import ValidationResult, ValidationSeverity
from .bracket_models import PlayoffBracket, PlayoffRound, ROUND_ORDER


class BracketValidator:
    """
    Validator for playoff bracket integrity.

    Checks:
    - Seeding (7 sequential seeds per conference, bye is the #1 seed)
    - Bye team absent from the wild card round
    - No team twice in a round
    - Recorded winners are participants
    - Eliminated teams never reappear
    - Each round's field is exactly the previous round's winners
    - Higher seed hosts within a conference
    - Champion matches the championship winner
    """

    SEEDS_PER_CONFERENCE = 7

    def __init__(self, logger=None):
        self._logger = logger or logging.getLogger(__name__)

    def validate(self, bracket: PlayoffBracket) -> ValidationResult:
        result = ValidationResult(valid=True)

        self._validate_seeding(bracket, result)
        self._validate_byes(bracket, result)
        self._validate_rounds(bracket, result)
        self._validate_progression(bracket, result)
        self._validate_champion(bracket, result)

        self._logger.debug(
            f"Bracket validation: {result.total_checks} checks, {len(result.errors)} errors"
        )
        return result

    # ==================== Seeding ====================

    def _validate_seeding(self, bracket: PlayoffBracket, result: ValidationResult):
        for conference, seeds in sorted(bracket.seeding.items()):
            result.check()
            if len(seeds) != self.SEEDS_PER_CONFERENCE:
                result.add_error(
                    ValidationSeverity.CRITICAL, "seeding",
                    f"{conference} has {len(seeds)} seeds, expected {self.SEEDS_PER_CONFERENCE}",
                    {"conference": conference}
                )

            result.check()
            numbers = [s.seed for s in seeds]
            if numbers != list(range(1, len(seeds) + 1)):
                result.add_error(
                    ValidationSeverity.ERROR, "seeding",
                    f"{conference} seeds are not numbered 1-{len(seeds)}",
                    {"conference": conference, "seeds": numbers}
                )

            result.check()
            team_ids = [s.team_id for s in seeds]
            if len(set(team_ids)) != len(team_ids):
                result.add_error(
                    ValidationSeverity.ERROR, "seeding",
                    f"{conference} seeds a team more than once",
                    {"conference": conference, "teams": team_ids}
                )

    def _validate_byes(self, bracket: PlayoffBracket, result: ValidationResult):
        wild_card_teams = {t for m in bracket.matchups(PlayoffRound.WILD_CARD) for t in m.participants}

        for conference, seeds in sorted(bracket.seeding.items()):
            bye_team = bracket.byes.get(conference)
            result.check()
            if not seeds or bye_team != seeds[0].team_id:
                result.add_error(
                    ValidationSeverity.ERROR, "byes",
                    f"{conference} bye team {bye_team} is not the #1 seed",
                    {"conference": conference}
                )
            result.check()
            if bye_team in wild_card_teams:
                result.add_error(
                    ValidationSeverity.CRITICAL, "byes",
                    f"Bye team {bye_team} appears in the wild card round",
                    {"conference": conference, "team_id": bye_team}
                )

    # ==================== Rounds ====================

    def _validate_rounds(self, bracket: PlayoffBracket, result: ValidationResult):
        for playoff_round in ROUND_ORDER:
            matchups = bracket.matchups(playoff_round)

            result.check()
            appearances = Counter(t for m in matchups for t in m.participants)
            repeated = sorted(t for t, count in appearances.items() if count > 1)
            if repeated:
                result.add_error(
                    ValidationSeverity.CRITICAL, "bracket",
                    f"Teams appear more than once in {playoff_round.display_name}: {repeated}",
                    {"round": playoff_round.value, "teams": repeated}
                )

            for matchup in matchups:
                result.check()
                if matchup.is_resolved and matchup.winner_id not in matchup.participants:
                    result.add_error(
                        ValidationSeverity.CRITICAL, "bracket",
                        f"Winner {matchup.winner_id} of {matchup.matchup_id} is not a participant",
                        {"matchup_id": matchup.matchup_id}
                    )
                result.check()
                if matchup.conference is not None and matchup.higher_seed.seed >= matchup.lower_seed.seed:
                    result.add_error(
                        ValidationSeverity.ERROR, "bracket",
                        f"{matchup.matchup_id} is hosted by the lower seed",
                        {"matchup_id": matchup.matchup_id}
                    )

    def _validate_progression(self, bracket: PlayoffBracket, result: ValidationResult):
        eliminated: Set[str] = set()

        for index, playoff_round in enumerate(ROUND_ORDER):
            matchups = bracket.matchups(playoff_round)
            participants = {t for m in matchups for t in m.participants}

            result.check()
            returning = sorted(participants & eliminated)
            if returning:
                result.add_error(
                    ValidationSeverity.CRITICAL, "progression",
                    f"Eliminated teams reappear in {playoff_round.display_name}: {returning}",
                    {"round": playoff_round.value, "teams": returning}
                )

            if index > 0 and matchups:
                previous = ROUND_ORDER[index - 1]
                expected = self._expected_field(bracket, previous)
                result.check()
                if participants != expected:
                    result.add_error(
                        ValidationSeverity.CRITICAL, "progression",
                        f"{playoff_round.display_name} field does not match {previous.display_name} winners",
                        {
                            "round": playoff_round.value,
                            "unexpected": sorted(participants - expected),
                            "missing": sorted(expected - participants),
                        }
                    )

            eliminated.update(m.loser_id for m in matchups if m.is_resolved)

    def _expected_field(self, bracket: PlayoffBracket, previous: PlayoffRound) -> Set[str]:
        winners = {m.winner_id for m in bracket.matchups(previous) if m.is_resolved}
        if previous == PlayoffRound.WILD_CARD:
            winners.update(bracket.byes.values())
        return winners

    def _validate_champion(self, bracket: PlayoffBracket, result: ValidationResult):
        result.check()
        final = bracket.matchups(PlayoffRound.CHAMPIONSHIP)
        expected = final[0].winner_id if final and final[0].is_resolved else None
        if bracket.champion_id != expected:
            result.add_error(
                ValidationSeverity.ERROR, "champion",
                f"Champion {bracket.champion_id} does not match championship winner {expected}",
                {"champion_id": bracket.champion_id}
            )


def validate_bracket(bracket: PlayoffBracket) -> ValidationResult:
    """Run every bracket consistency check."""
    return BracketValidator().validate(bracket)
