"""
Season Constants

Centralized constants for season simulation to eliminate magic numbers.

Usage:
    from season.season_constants import SeasonConstants

    if state.current_week > SeasonConstants.REGULAR_SEASON_WEEKS:
        # Transition to playoffs
"""


class SeasonConstants:
    """
    Season simulation constants.

    This class provides the numeric constants used throughout the season
    simulation system.
    """

    # ==================== Game Counts ====================

    REGULAR_SEASON_WEEKS = 18
    """Number of regular season weeks"""

    REGULAR_SEASON_GAMES_PER_TEAM = 17
    """Games per team in regular season"""

    REGULAR_SEASON_GAME_COUNT = 272
    """Total regular season games (32 teams × 17 games / 2 teams per game)"""

    PLAYOFF_GAME_COUNT = 13
    """
    Total playoff games:
    - Wild Card Round: 6 games
    - Divisional Round: 4 games
    - Conference Championships: 2 games
    - Championship: 1 game
    """

    # ==================== Playoffs ====================

    PLAYOFF_TEAMS_PER_CONFERENCE = 7
    BYE_TEAMS_PER_CONFERENCE = 1

    WILD_CARD_WEEK = 19
    DIVISIONAL_WEEK = 20
    CONFERENCE_WEEK = 21
    CHAMPIONSHIP_WEEK = 22

    # ==================== Simulation ====================

    ENGINE_MAX_ATTEMPTS = 2
    """One retry after a transient engine failure"""

    HIGH_IMPORTANCE_FROM_WEEK = 15
    """Regular season games from this week on get the "clutch" flag"""

    DOME_HOME_FIELD_MODIFIER = 0.5
    OUTDOOR_HOME_FIELD_MODIFIER = 1.0
    NEUTRAL_SITE_HOME_FIELD_MODIFIER = 0.0
