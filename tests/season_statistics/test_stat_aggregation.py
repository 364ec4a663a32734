"""
Tests for season stat aggregation.

Aggregation is a pure fold: same results in any order give the same totals.
"""

from shared.game_result import PlayerGameStats
from season_statistics import accumulate_game_stats, aggregate_season_stats, aggregate_team_stats
from mocks.league import make_result, quarterback_line


def _rusher(team_id, yards, long_run, player_id="RB-7", snaps=30):
    return PlayerGameStats(
        player_id=player_id,
        player_name="Traded Back",
        team_id=team_id,
        position="RB",
        snaps=snaps,
        team_snaps=60,
        rushing_attempts=15,
        rushing_yards=yards,
        rushing_long=long_run,
        fumbles_lost=1,
    )


def _season():
    return [
        make_result("G1", 1, "AN1", "AN2", 24, 17, player_stats=(
            quarterback_line("AN1", yards=280, touchdowns=3),
            quarterback_line("AN2", yards=190, touchdowns=1),
            _rusher("AN1", 80, 22),
        )),
        make_result("G2", 2, "AS1", "AN1", 10, 13, player_stats=(
            quarterback_line("AN1", yards=210, touchdowns=1),
            _rusher("AN1", 95, 41),
        )),
        make_result("G3", 3, "AS1", "AE1", 30, 27, player_stats=(
            quarterback_line("AE1", yards=300, touchdowns=2),
            _rusher("AS1", 40, 9),
        )),
    ]


class TestAggregateSeasonStats:

    def test_totals(self):
        stats = aggregate_season_stats(_season())

        qb = stats["AN1-QB"]
        assert qb.games_played == 2
        assert qb.passing_yards == 490
        assert qb.passing_touchdowns == 4
        assert qb.passing_attempts == 60

        rb = stats["RB-7"]
        assert rb.games_played == 3
        assert rb.rushing_yards == 215
        assert rb.fumbles_lost == 3
        assert rb.snaps == 90

    def test_long_keeps_maximum(self):
        assert aggregate_season_stats(_season())["RB-7"].rushing_long == 41

    def test_order_independent(self):
        results = _season()
        assert aggregate_season_stats(results) == aggregate_season_stats(list(reversed(results)))

    def test_latest_appearance_sets_team(self):
        forward = aggregate_season_stats(_season())
        backward = aggregate_season_stats(list(reversed(_season())))

        assert forward["RB-7"].team_id == "AS1"
        assert backward["RB-7"].team_id == "AS1"
        assert forward["RB-7"].last_week == 3

    def test_duplicate_game_counted_once(self):
        results = _season()
        stats = aggregate_season_stats(results + [results[0]])
        assert stats["AN1-QB"].games_played == 2

    def test_rerun_is_identical(self):
        results = _season()
        assert aggregate_season_stats(results) == aggregate_season_stats(results)

    def test_inactive_line_skipped(self):
        inactive = PlayerGameStats(player_id="AN1-K", player_name="Kicker", team_id="AN1", position="K")
        result = make_result("G1", 1, "AN1", "AN2", 3, 0, player_stats=(inactive,))

        assert aggregate_season_stats([result]) == {}

    def test_keys_sorted(self):
        assert list(aggregate_season_stats(_season())) == sorted(aggregate_season_stats(_season()))


class TestAccumulateGameStats:

    def test_input_not_modified(self):
        first, second = _season()[:2]
        after_one = accumulate_game_stats({}, first)
        snapshot = dict(after_one)

        after_two = accumulate_game_stats(after_one, second)

        assert after_one == snapshot
        assert after_two["AN1-QB"].games_played == 2
        assert after_one["AN1-QB"].games_played == 1

    def test_derived_rates(self):
        stats = accumulate_game_stats({}, _season()[0])
        qb = stats["AN1-QB"]

        assert qb.completion_percentage == 66.7
        assert qb.yards_per_attempt == 9.3
        assert qb.passer_rating > 100
        assert stats["RB-7"].yards_per_carry == 5.3


class TestAggregateTeamStats:

    def test_team_totals(self):
        teams = aggregate_team_stats(_season())

        an1 = teams["AN1"]
        assert an1.games_played == 2
        assert (an1.wins, an1.losses, an1.ties) == (2, 0, 0)
        assert an1.points_for == 37
        assert an1.points_against == 27
        assert an1.passing_yards == 490
        assert an1.rushing_yards == 175
        assert an1.turnovers == 2
        assert an1.points_per_game == 18.5

    def test_team_without_box_score(self):
        teams = aggregate_team_stats(_season())
        assert teams["AS1"].losses == 1
        assert teams["AS1"].wins == 1
        assert teams["AN2"].passing_yards == 190
