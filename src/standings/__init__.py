"""
Standings System

Pure standings updates, tiebreak resolution and clinching logic.
"""

from .models import (
    HeadToHeadRecord,
    TeamStanding,
    StandingsTable,
    ClinchType,
    ClinchEvent,
)
from .standings_tracker import (
    create_initial_standings,
    update_standings_with_game,
    replay_standings,
)
from .tiebreakers import (
    TIEBREAK_RULES,
    rank_teams,
    rank_teams_with_notes,
    break_ties,
    describe_tiebreaks,
    division_standings,
    conference_standings,
    division_leaders,
)
from .clinching import check_clinching

__all__ = [
    'HeadToHeadRecord',
    'TeamStanding',
    'StandingsTable',
    'ClinchType',
    'ClinchEvent',
    'create_initial_standings',
    'update_standings_with_game',
    'replay_standings',
    'TIEBREAK_RULES',
    'rank_teams',
    'rank_teams_with_notes',
    'break_ties',
    'describe_tiebreaks',
    'division_standings',
    'conference_standings',
    'division_leaders',
    'check_clinching',
]
