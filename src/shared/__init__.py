"""
Shared Models

League data, game results and validation containers used across the
season engine packages.
"""

from .team import Team, RosterPlayer, LeagueStructure, DIVISION_ORDER
from .game_result import (
    GameResult,
    PlayerGameStats,
    PlayerInjury,
    InjuryType,
    INJURY_DURATION,
)
from .validation import (
    ValidationSeverity,
    ValidationError,
    ValidationResult,
    ValidationFailedException,
)

__all__ = [
    'Team',
    'RosterPlayer',
    'LeagueStructure',
    'DIVISION_ORDER',
    'GameResult',
    'PlayerGameStats',
    'PlayerInjury',
    'InjuryType',
    'INJURY_DURATION',
    'ValidationSeverity',
    'ValidationError',
    'ValidationResult',
    'ValidationFailedException',
]
