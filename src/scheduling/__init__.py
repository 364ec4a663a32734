"""
Schedule Generation System

Builds and validates the 18-week regular season calendar.
"""

from .config import ScheduleConfig, ByeWeekConfig, PrimetimeConfig
from .models import (
    TimeSlot,
    GameDay,
    GameType,
    ScheduledGame,
    WeekSchedule,
    TeamSchedule,
    LeagueSchedule,
    make_game_id,
)
from .schedule_exceptions import (
    SchedulingException,
    ScheduleGenerationError,
    ScheduleConfigurationError,
)
from .schedule_generator import ScheduleGenerator, generate_schedule
from .schedule_validator import ScheduleValidator, validate_schedule

__all__ = [
    'ScheduleConfig',
    'ByeWeekConfig',
    'PrimetimeConfig',
    'TimeSlot',
    'GameDay',
    'GameType',
    'ScheduledGame',
    'WeekSchedule',
    'TeamSchedule',
    'LeagueSchedule',
    'make_game_id',
    'SchedulingException',
    'ScheduleGenerationError',
    'ScheduleConfigurationError',
    'ScheduleGenerator',
    'generate_schedule',
    'ScheduleValidator',
    'validate_schedule',
]
