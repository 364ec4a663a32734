"""
Playoff Bracket Data Models

Immutable structures for a playoff bracket. Recording a result produces a
new PlayoffBracket; earlier values stay valid checkpoints.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .seeding_models import PlayoffSeed


class PlayoffRound(Enum):
    """Playoff rounds in the order they are played"""
    WILD_CARD = "wild_card"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    CHAMPIONSHIP = "championship"

    @property
    def display_name(self) -> str:
        return {
            PlayoffRound.WILD_CARD: "Wild Card",
            PlayoffRound.DIVISIONAL: "Divisional Round",
            PlayoffRound.CONFERENCE: "Conference Championship",
            PlayoffRound.CHAMPIONSHIP: "Championship",
        }[self]

    @property
    def code(self) -> str:
        return {
            PlayoffRound.WILD_CARD: "WC",
            PlayoffRound.DIVISIONAL: "DIV",
            PlayoffRound.CONFERENCE: "CONF",
            PlayoffRound.CHAMPIONSHIP: "CHAMP",
        }[self]

    @property
    def next_round(self) -> Optional['PlayoffRound']:
        index = ROUND_ORDER.index(self)
        return ROUND_ORDER[index + 1] if index + 1 < len(ROUND_ORDER) else None


ROUND_ORDER: Tuple[PlayoffRound, ...] = (
    PlayoffRound.WILD_CARD,
    PlayoffRound.DIVISIONAL,
    PlayoffRound.CONFERENCE,
    PlayoffRound.CHAMPIONSHIP,
)


@dataclass(frozen=True)
class PlayoffMatchup:
    """
    A single playoff game between two seeded teams.

    The higher seed hosts. ``conference`` is None for the championship.
    """
    matchup_id: str
    round: PlayoffRound
    conference: Optional[str]
    higher_seed: PlayoffSeed
    lower_seed: PlayoffSeed
    winner_id: Optional[str] = None
    game_id: Optional[str] = None

    @property
    def home_team_id(self) -> str:
        return self.higher_seed.team_id

    @property
    def away_team_id(self) -> str:
        return self.lower_seed.team_id

    @property
    def participants(self) -> Tuple[str, str]:
        return (self.higher_seed.team_id, self.lower_seed.team_id)

    @property
    def is_resolved(self) -> bool:
        return self.winner_id is not None

    @property
    def loser_id(self) -> Optional[str]:
        if self.winner_id is None:
            return None
        return self.lower_seed.team_id if self.winner_id == self.higher_seed.team_id else self.higher_seed.team_id

    @property
    def winner_seed(self) -> Optional[PlayoffSeed]:
        if self.winner_id is None:
            return None
        return self.higher_seed if self.winner_id == self.higher_seed.team_id else self.lower_seed

    @property
    def matchup_string(self) -> str:
        """e.g. '(7) BUF @ (2) KC'"""
        return (
            f"({self.lower_seed.seed}) {self.lower_seed.team_id} @ "
            f"({self.higher_seed.seed}) {self.higher_seed.team_id}"
        )

    def with_result(self, winner_id: str, game_id: Optional[str] = None) -> 'PlayoffMatchup':
        return replace(self, winner_id=winner_id, game_id=game_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matchup_id': self.matchup_id,
            'round': self.round.value,
            'conference': self.conference,
            'higher_seed': self.higher_seed.to_dict(),
            'lower_seed': self.lower_seed.to_dict(),
            'winner_id': self.winner_id,
            'game_id': self.game_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffMatchup':
        return cls(
            matchup_id=data['matchup_id'],
            round=PlayoffRound(data['round']),
            conference=data.get('conference'),
            higher_seed=PlayoffSeed.from_dict(data['higher_seed']),
            lower_seed=PlayoffSeed.from_dict(data['lower_seed']),
            winner_id=data.get('winner_id'),
            game_id=data.get('game_id'),
        )


@dataclass(frozen=True)
class PlayoffBracket:
    """
    Whole postseason bracket.

    Attributes:
        season: Season year
        seeding: conference -> seeds 1-7 in order
        byes: conference -> team id of the #1 seed
        rounds: rounds created so far, each with its matchups
        champion_id: Set once the championship is recorded
    """
    season: int
    seeding: Dict[str, Tuple[PlayoffSeed, ...]]
    byes: Dict[str, str]
    rounds: Dict[PlayoffRound, Tuple[PlayoffMatchup, ...]] = field(default_factory=dict)
    champion_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.champion_id is not None

    @property
    def conferences(self) -> List[str]:
        return sorted(self.seeding)

    def matchups(self, playoff_round: PlayoffRound) -> Tuple[PlayoffMatchup, ...]:
        return self.rounds.get(playoff_round, ())

    def all_matchups(self) -> List[PlayoffMatchup]:
        return [m for r in ROUND_ORDER for m in self.matchups(r)]

    def get_matchup(self, matchup_id: str) -> Optional[PlayoffMatchup]:
        for matchup in self.all_matchups():
            if matchup.matchup_id == matchup_id:
                return matchup
        return None

    def seed_for(self, team_id: str) -> Optional[PlayoffSeed]:
        for seeds in self.seeding.values():
            for seed in seeds:
                if seed.team_id == team_id:
                    return seed
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'seeding': {c: [s.to_dict() for s in seeds] for c, seeds in sorted(self.seeding.items())},
            'byes': dict(sorted(self.byes.items())),
            'rounds': {
                r.value: [m.to_dict() for m in self.rounds[r]]
                for r in ROUND_ORDER if r in self.rounds
            },
            'champion_id': self.champion_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffBracket':
        return cls(
            season=data['season'],
            seeding={
                c: tuple(PlayoffSeed.from_dict(s) for s in seeds)
                for c, seeds in data['seeding'].items()
            },
            byes=dict(data['byes']),
            rounds={
                PlayoffRound(r): tuple(PlayoffMatchup.from_dict(m) for m in matchups)
                for r, matchups in data.get('rounds', {}).items()
            },
            champion_id=data.get('champion_id'),
        )
