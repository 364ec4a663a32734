"""
Training

Player development XP: models, the development protocol with its default
calculator, and the bridge that maps season events to XP grants.
"""

from .models import XPSource, XPGrant, PracticeFocus, PracticeIntensity, PracticePlan, AgeProgression
from .player_development import PlayerDevelopment, DefaultPlayerDevelopment, performance_xp_bonus
from .training_bridge import TrainingIntegrationBridge, performance_grade

__all__ = [
    'XPSource',
    'XPGrant',
    'PracticeFocus',
    'PracticeIntensity',
    'PracticePlan',
    'AgeProgression',
    'PlayerDevelopment',
    'DefaultPlayerDevelopment',
    'performance_xp_bonus',
    'TrainingIntegrationBridge',
    'performance_grade',
]
