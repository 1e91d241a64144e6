from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    GameConflict = 'GameConflict'
    GameNotFound = 'GameNotFound'
    PlayerConflict = 'PlayerConflict'
    PlayerNotFound = 'PlayerNotFound'
    RoundNotInStartState = 'RoundNotInStartState'
    RoundNotInCollectingAnswersState = 'RoundNotInCollectingAnswersState'
    WordNotInDictionary = 'WordNotInDictionary'
    WordUsesExtraLetters = 'WordUsesExtraLetters'
    InvalidGameSettings = 'InvalidGameSettings'
    WordMustBeAtLeastTwoLetters = 'WordMustBeAtLeastTwoLetters'


MESSAGES = {
    ErrorKind.GameConflict: 'game conflict',
    ErrorKind.GameNotFound: 'game not found',
    ErrorKind.PlayerConflict: 'player conflict',
    ErrorKind.PlayerNotFound: 'player not found',
    ErrorKind.RoundNotInStartState: 'round not in start state',
    ErrorKind.RoundNotInCollectingAnswersState: 'round not in collecting answer state',
    ErrorKind.WordNotInDictionary: 'word was not in dictionary',
    ErrorKind.WordUsesExtraLetters: 'word uses extra letters',
    ErrorKind.InvalidGameSettings: 'invalid game settings',
    ErrorKind.WordMustBeAtLeastTwoLetters: 'word must be at least two letters long',
}


class ScrambleError(Exception):
    """A rejected game operation. Expected outcome, reported back to the caller."""

    def __init__(self, kind: ErrorKind):
        self.kind = kind
        self.message = MESSAGES[kind]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f'ScrambleError({self.kind.value})'


class DictionaryLoadError(RuntimeError):
    """The word list could not be read or parsed. Fatal at startup."""


class RoundStateError(RuntimeError):
    """A round recorded more answers than the game has players."""
