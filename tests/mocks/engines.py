"""
Stub game engines with deterministic outcomes.
"""

import threading
from typing import Dict, List, Optional

from season.game_engine import EngineError, FatalEngineError
from shared.game_result import PlayerInjury
from mocks.league import make_result, quarterback_line, team_strength


class StrengthEngine:
    """Stronger team wins 27-13. Safe to call from several threads."""

    def __init__(self, injuries: Optional[Dict[str, PlayerInjury]] = None):
        self.calls: List[str] = []
        self.situations: List[object] = []
        self._lock = threading.Lock()
        # game_id -> injury reported in that game
        self.injuries = injuries or {}

    def simulate(self, home_roster, away_roster, situation):
        with self._lock:
            self.calls.append(situation.game_id)
            self.situations.append(situation)

        home, away = situation.home_team_id, situation.away_team_id
        home_wins = team_strength(home) > team_strength(away)
        injury = self.injuries.get(situation.game_id)
        return make_result(
            situation.game_id,
            situation.week,
            home,
            away,
            27 if home_wins else 13,
            13 if home_wins else 27,
            player_stats=(quarterback_line(home), quarterback_line(away, yards=180, touchdowns=1)),
            injuries=(injury,) if injury else (),
        )


class FlakyEngine(StrengthEngine):
    """Fails the first ``failures_per_game`` attempts of the listed games."""

    def __init__(self, flaky_game_ids, failures_per_game: int = 1):
        super().__init__()
        self.flaky_game_ids = set(flaky_game_ids)
        self.failures_per_game = failures_per_game
        self.failures: Dict[str, int] = {}

    def simulate(self, home_roster, away_roster, situation):
        game_id = situation.game_id
        if game_id in self.flaky_game_ids:
            with self._lock:
                failed = self.failures.get(game_id, 0)
                if failed < self.failures_per_game:
                    self.failures[game_id] = failed + 1
                    self.calls.append(game_id)
                    raise EngineError(f"data not ready for {game_id}", game_id=game_id)
        return super().simulate(home_roster, away_roster, situation)


class FatalEngine(StrengthEngine):
    """Raises FatalEngineError for the listed games."""

    def __init__(self, fatal_game_ids):
        super().__init__()
        self.fatal_game_ids = set(fatal_game_ids)

    def simulate(self, home_roster, away_roster, situation):
        if situation.game_id in self.fatal_game_ids:
            with self._lock:
                self.calls.append(situation.game_id)
            raise FatalEngineError(f"malformed roster in {situation.game_id}", game_id=situation.game_id)
        return super().simulate(home_roster, away_roster, situation)


class TieEngine(StrengthEngine):
    """Every game ends 20-20."""

    def simulate(self, home_roster, away_roster, situation):
        with self._lock:
            self.calls.append(situation.game_id)
        return make_result(
            situation.game_id, situation.week, situation.home_team_id, situation.away_team_id, 20, 20
        )
