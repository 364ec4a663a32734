"""
Season Simulation

Season state machine, game engine interface, options and exceptions.
"""

from .season_simulator import SeasonSimulator, CombineSimulator
from .season_state import SeasonPhase, SeasonState, WeekSummary
from .season_options import SeasonSimOptions
from .season_constants import SeasonConstants
from .game_engine import GameEngine, GameSituation, EngineError, FatalEngineError
from .injuries import update_injuries
from .season_exceptions import (
    SeasonException,
    InvalidTransitionError,
    SimulationError,
    SeasonInitializationError,
)

__all__ = [
    'SeasonSimulator',
    'CombineSimulator',
    'SeasonPhase',
    'SeasonState',
    'WeekSummary',
    'SeasonSimOptions',
    'SeasonConstants',
    'GameEngine',
    'GameSituation',
    'EngineError',
    'FatalEngineError',
    'update_injuries',
    'SeasonException',
    'InvalidTransitionError',
    'SimulationError',
    'SeasonInitializationError',
]
