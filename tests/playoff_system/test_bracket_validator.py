"""
Tests for BracketValidator.
"""

from dataclasses import replace

import pytest

from playoff_system import PlayoffManager, PlayoffRound, get_current_round, get_remaining_matchups, validate_bracket
from mocks.league import final_standings


def _chalk(manager, bracket, rounds):
    for _ in range(rounds):
        for matchup in get_remaining_matchups(bracket, get_current_round(bracket)):
            bracket = manager.record_playoff_result(bracket, matchup.matchup_id, matchup.home_team_id)
    return bracket


def _replace_round(bracket, playoff_round, matchups):
    rounds = dict(bracket.rounds)
    rounds[playoff_round] = tuple(matchups)
    return replace(bracket, rounds=rounds)


@pytest.fixture
def manager():
    return PlayoffManager()


@pytest.fixture
def bracket(manager, league_teams):
    return manager.generate_playoff_bracket(final_standings(league_teams))


class TestBracketValidator:

    @pytest.mark.parametrize("rounds", [0, 1, 2, 3, 4])
    def test_real_bracket_valid_at_every_stage(self, manager, bracket, rounds):
        result = validate_bracket(_chalk(manager, bracket, rounds))
        assert result.valid, [str(e) for e in result.errors]

    def test_bye_team_in_wild_card(self, bracket):
        wild_card = list(bracket.matchups(PlayoffRound.WILD_CARD))
        wild_card[0] = replace(wild_card[0], higher_seed=bracket.seed_for("AN1"))

        result = validate_bracket(_replace_round(bracket, PlayoffRound.WILD_CARD, wild_card))

        assert result.errors_in("byes")

    def test_winner_not_participant(self, bracket):
        wild_card = list(bracket.matchups(PlayoffRound.WILD_CARD))
        wild_card[0] = replace(wild_card[0], winner_id="NN1")

        result = validate_bracket(_replace_round(bracket, PlayoffRound.WILD_CARD, wild_card))

        assert result.errors_in("bracket")

    def test_eliminated_team_reappears(self, manager, bracket):
        bracket = _chalk(manager, bracket, 1)
        loser = bracket.get_matchup("2025-WC-AFC-2v7").lower_seed
        divisional = list(bracket.matchups(PlayoffRound.DIVISIONAL))
        divisional[0] = replace(divisional[0], lower_seed=loser)

        result = validate_bracket(_replace_round(bracket, PlayoffRound.DIVISIONAL, divisional))

        assert result.errors_in("progression")

    def test_champion_mismatch(self, manager, bracket):
        bracket = _chalk(manager, bracket, 4)
        result = validate_bracket(replace(bracket, champion_id="AW1"))
        assert result.errors_in("champion")

    def test_short_seeding(self, bracket):
        seeding = dict(bracket.seeding)
        seeding["AFC"] = seeding["AFC"][:6]
        result = validate_bracket(replace(bracket, seeding=seeding))
        assert result.errors_in("seeding")
