from __future__ import annotations
from enum import Enum
from typing import Dict, List, Literal, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .tiles import TILES


class ScoringMethod(str, Enum):
    Normal = 'Normal'
    Length = 'Length'

    def score(self, entry) -> int:
        if self is ScoringMethod.Length:
            return len(entry.word)
        return entry.score


class CamelModel(BaseModel):
    # wire format is camelCase, python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GameSettings(CamelModel):
    tile_count: int = 7
    lookup_allowance: int = 2
    scoring_method: ScoringMethod = ScoringMethod.Normal
    banned_letters: Set[str] = Field(default_factory=set)

    @field_validator('banned_letters')
    @classmethod
    def _uppercase_letters(cls, value: Set[str]) -> Set[str]:
        return {letter.upper() for letter in value}

    @field_serializer('banned_letters')
    def _sorted_letters(self, value: Set[str]) -> List[str]:
        return sorted(value)

    def is_valid(self) -> bool:
        if self.tile_count < 2 or self.lookup_allowance < 0:
            return False
        letters = {t.letter for t in TILES}
        if any(len(b) != 1 or b not in letters for b in self.banned_letters):
            return False
        # enough tiles must remain in the bag once banned letters are removed
        remaining = sum(t.count for t in TILES if t.letter not in self.banned_letters)
        return remaining >= self.tile_count


RoundStateName = Literal['Start', 'CollectingAnswers', 'Complete']


class WordInfo(CamelModel):
    word: str
    score: int
    definition: str


class AnswerInfo(CamelModel):
    player: str
    submitted_word: str
    score: int
    definition: str


class RoundView(CamelModel):
    letters: List[str]
    answers: List[AnswerInfo] = []
    lookups_used: Dict[str, int] = {}
    best_answers: List[WordInfo] = []
    state: RoundStateName


class GameView(CamelModel):
    players: List[str]
    rounds: List[RoundView]
    settings: GameSettings


# Request bodies

class PlayerData(CamelModel):
    player: str


class CreateGameData(CamelModel):
    player: str
    settings: GameSettings = Field(default_factory=GameSettings)


class AnswerData(CamelModel):
    player: str
    answer: str


# Responses

class ErrorResponse(CamelModel):
    error: str
    message: str


class LookupResult(CamelModel):
    word: str
    valid: bool
    score: Optional[int] = None
    definition: Optional[str] = None
