"""
Tests for Team, RosterPlayer and LeagueStructure.
"""

from shared.team import LeagueStructure, RosterPlayer, Team


class TestLeagueStructure:

    def test_conferences_and_divisions(self, league_teams):
        league = LeagueStructure(league_teams)

        assert league.conferences == ["AFC", "NFC"]
        assert league.divisions_in("AFC") == ["AFC North", "AFC South", "AFC East", "AFC West"]
        assert league.division_teams("NFC West") == ["NW1", "NW2", "NW3", "NW4"]

    def test_conference_teams_in_division_order(self, league_teams):
        league = LeagueStructure(league_teams)
        afc = league.conference_teams("AFC")

        assert len(afc) == 16
        assert afc[:5] == ["AN1", "AN2", "AN3", "AN4", "AS1"]

    def test_division_order_independent_of_input(self, league_teams):
        league = LeagueStructure(reversed(league_teams))

        assert league.divisions_in("NFC") == ["NFC North", "NFC South", "NFC East", "NFC West"]
        # Teams inside a division keep the given order
        assert league.division_teams("NFC West") == ["NW4", "NW3", "NW2", "NW1"]

    def test_lookups(self, league_teams):
        league = LeagueStructure(league_teams)

        assert league.conference_of("AE3") == "AFC"
        assert league.division_of("AE3") == "AFC East"
        assert league.division_rivals("AE3") == ["AE1", "AE2", "AE4"]

    def test_standard_shape(self, league_teams):
        assert LeagueStructure(league_teams).is_standard_shape()
        assert not LeagueStructure(league_teams[:-1]).is_standard_shape()
        assert not LeagueStructure(league_teams[:16]).is_standard_shape()


class TestTeam:

    def test_display_name(self):
        assert Team("t1", "Hawks", "AFC", "AFC North", city="Seattle").display_name == "Seattle Hawks"
        assert Team("t1", "Hawks", "AFC", "AFC North").display_name == "Hawks"

    def test_get_player(self, league_teams):
        team = league_teams[0]

        assert team.get_player("AN1-QB").position == "QB"
        assert team.get_player("NW4-QB") is None

    def test_dict_round_trip(self, league_teams):
        team = league_teams[5]
        assert Team.from_dict(team.to_dict()) == team

    def test_roster_player_defaults(self):
        player = RosterPlayer.from_dict({'player_id': "p1", 'name': "P One", 'position': "WR"})

        assert player.age == 25
        assert player.overall == 70
        assert player.traits == ()
