"""
Persistence Module

Save slots holding serialized season state snapshots.
"""

from .save_slots import SaveSlotStore, SaveSlotInfo, SaveSlotError

__all__ = ['SaveSlotStore', 'SaveSlotInfo', 'SaveSlotError']
