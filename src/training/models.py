"""
Training Data Models

XP grants, practice plans and age progression results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class XPSource(Enum):
    """Where a grant of experience points came from"""
    GAME = "game"
    PRACTICE = "practice"
    BYE_WEEK = "bye_week"
    AWARD = "award"
    PLAYOFF_GAME = "playoff_game"


class PracticeFocus(Enum):
    PASSING = "passing"
    RUNNING = "running"
    PASS_RUSH = "pass_rush"
    COVERAGE = "coverage"
    RED_ZONE_OFFENSE = "red_zone_offense"
    RED_ZONE_DEFENSE = "red_zone_defense"
    SPECIAL_TEAMS = "special_teams"
    CONDITIONING = "conditioning"
    FILM_STUDY = "film_study"
    RECOVERY = "recovery"


class PracticeIntensity(Enum):
    HIGH = "high"
    NORMAL = "normal"
    LIGHT = "light"
    REST = "rest"


@dataclass(frozen=True)
class PracticePlan:
    """A team's weekly practice assignment."""
    focus: PracticeFocus = PracticeFocus.CONDITIONING
    intensity: PracticeIntensity = PracticeIntensity.NORMAL

    def to_dict(self) -> Dict[str, str]:
        return {'focus': self.focus.value, 'intensity': self.intensity.value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'PracticePlan':
        return cls(
            focus=PracticeFocus(data.get('focus', 'conditioning')),
            intensity=PracticeIntensity(data.get('intensity', 'normal')),
        )


@dataclass(frozen=True)
class XPGrant:
    """
    Experience points awarded to one player for one event.

    Attributes:
        player_id: Receiving player
        team_id: Player's team when the XP was earned
        week: Season week of the event
        source: Event category
        amount: XP awarded (always positive)
        description: Human-readable reason
    """
    player_id: str
    team_id: str
    week: int
    source: XPSource
    amount: int
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'team_id': self.team_id,
            'week': self.week,
            'source': self.source.value,
            'amount': self.amount,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'XPGrant':
        return cls(
            player_id=data['player_id'],
            team_id=data['team_id'],
            week=data['week'],
            source=XPSource(data['source']),
            amount=data['amount'],
            description=data.get('description', ''),
        )


@dataclass(frozen=True)
class AgeProgression:
    """Offseason rating change driven by a player's age curve."""
    player_id: str
    age: int
    phase: str
    physical_change: int
    technical_change: int
    mental_change: int
    old_overall: int
    new_overall: int

    @property
    def overall_change(self) -> int:
        return self.new_overall - self.old_overall

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'age': self.age,
            'phase': self.phase,
            'physical_change': self.physical_change,
            'technical_change': self.technical_change,
            'mental_change': self.mental_change,
            'old_overall': self.old_overall,
            'new_overall': self.new_overall,
        }
