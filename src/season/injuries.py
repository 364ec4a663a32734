"""
Weekly injury bookkeeping.

Injuries already open before a week count down by one once the week is
processed; those reaching zero are recoveries. Injuries suffered during the
week are then added with their full duration.
"""

from typing import Dict, Iterable, List, Mapping, Tuple

from shared.game_result import GameResult, PlayerInjury


def collect_new_injuries(results: Iterable[GameResult]) -> List[PlayerInjury]:
    """Injuries from a week's results, in result order."""
    return [injury for result in results for injury in result.injuries]


def update_injuries(
    current: Mapping[str, PlayerInjury],
    new_injuries: Iterable[PlayerInjury]
) -> Tuple[Dict[str, PlayerInjury], List[PlayerInjury]]:
    """
    Advance injuries by one week and add the week's new ones.

    Args:
        current: Open injuries keyed by player id before the week
        new_injuries: Injuries suffered during the week

    Returns:
        (open injuries after the week, recoveries this week)
    """
    updated: Dict[str, PlayerInjury] = {}
    recoveries: List[PlayerInjury] = []

    for player_id in sorted(current):
        injury = current[player_id].decremented()
        if injury.is_active:
            updated[player_id] = injury
        else:
            recoveries.append(injury)

    for injury in new_injuries:
        if injury.weeks_remaining <= 0:
            continue
        existing = updated.get(injury.player_id)
        # A re-injury keeps whichever absence is longer
        if existing is None or injury.weeks_remaining > existing.weeks_remaining:
            updated[injury.player_id] = injury

    return updated, recoveries
