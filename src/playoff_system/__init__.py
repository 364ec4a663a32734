"""
Playoff System

Playoff seeding, bracket generation, result recording and re-seeding.
"""

from .playoff_seeder import PlayoffSeeder
from .seeding_models import PlayoffSeeding, ConferenceSeeding, PlayoffSeed
from .bracket_models import PlayoffRound, PlayoffMatchup, PlayoffBracket, ROUND_ORDER
from .playoff_manager import (
    PlayoffManager,
    generate_playoff_bracket,
    record_playoff_result,
    reseed,
    is_round_complete,
    get_remaining_matchups,
    get_current_round,
    get_eliminated_teams,
)
from .bracket_validator import BracketValidator, validate_bracket
from .playoff_exceptions import PlayoffException, InvalidMatchupError, InvalidSeedingError

__all__ = [
    'PlayoffSeeder',
    'PlayoffSeeding',
    'ConferenceSeeding',
    'PlayoffSeed',
    'PlayoffRound',
    'PlayoffMatchup',
    'PlayoffBracket',
    'ROUND_ORDER',
    'PlayoffManager',
    'generate_playoff_bracket',
    'record_playoff_result',
    'reseed',
    'is_round_complete',
    'get_remaining_matchups',
    'get_current_round',
    'get_eliminated_teams',
    'BracketValidator',
    'validate_bracket',
    'PlayoffException',
    'InvalidMatchupError',
    'InvalidSeedingError',
]
