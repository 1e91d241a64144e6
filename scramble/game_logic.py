from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set

from .dictionary import DictionaryService, WordEntry
from .errors import ErrorKind, RoundStateError, ScrambleError
from .schemas import AnswerInfo, GameSettings, GameView, RoundView, ScoringMethod

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 2


class RoundState(str, Enum):
    Start = 'Start'
    CollectingAnswers = 'CollectingAnswers'
    Complete = 'Complete'


@dataclass(frozen=True)
class AnsweredWord:
    player: str
    submitted_word: str
    score: int
    definition: str

    def to_info(self) -> AnswerInfo:
        return AnswerInfo(
            player=self.player,
            submitted_word=self.submitted_word,
            score=self.score,
            definition=self.definition,
        )


class Round:
    def __init__(self, letters: List[str]):
        self.letters: List[str] = [ch.upper() for ch in letters]
        self.answers: List[AnsweredWord] = []
        self.lookups_used: Dict[str, int] = {}
        # Empty until the enrichment task attaches its result
        self.best_answers: List[WordEntry] = []

    def state(self, players: int) -> RoundState:
        answered = len(self.answers)
        if answered == 0:
            return RoundState.Start
        if answered < players:
            return RoundState.CollectingAnswers
        if answered == players:
            return RoundState.Complete
        raise RoundStateError(f'round has {answered} answers but the game has {players} players')

    def answer_for(self, player: str) -> Optional[AnsweredWord]:
        return next((a for a in self.answers if a.player == player), None)

    def to_view(self, players: int) -> RoundView:
        return RoundView(
            letters=list(self.letters),
            answers=[a.to_info() for a in self.answers],
            lookups_used=dict(self.lookups_used),
            best_answers=[e.to_info() for e in self.best_answers],
            state=self.state(players).value,
        )


class Game:
    def __init__(self, settings: GameSettings):
        self.players: Set[str] = set()
        self.rounds: List[Round] = []
        self.settings = settings

    @property
    def current_round(self) -> Round:
        return self.rounds[-1]

    def current_round_state(self) -> RoundState:
        return self.current_round.state(len(self.players))

    def add_round(self, letters: List[str]) -> Round:
        round_ = Round(letters)
        self.rounds.append(round_)
        return round_

    def add_player(self, player: str) -> None:
        if self.current_round_state() != RoundState.Start:
            raise ScrambleError(ErrorKind.RoundNotInStartState)
        if player in self.players:
            raise ScrambleError(ErrorKind.PlayerConflict)
        self.players.add(player)

    def remove_player(self, player: str) -> None:
        if self.current_round_state() != RoundState.Start:
            raise ScrambleError(ErrorKind.RoundNotInStartState)
        self.players.discard(player)

    def submit_answer(self, player: str, word: str, dictionary: DictionaryService) -> None:
        """Record ``player``'s answer for the current round.

        A player who already answered this round gets a silent success. An
        unknown word costs one lookup; once a player has used more lookups
        than the game allows, the word is recorded with zero points instead
        of being rejected.
        """
        if player not in self.players:
            raise ScrambleError(ErrorKind.PlayerNotFound)
        if self.current_round_state() not in (RoundState.Start, RoundState.CollectingAnswers):
            raise ScrambleError(ErrorKind.RoundNotInCollectingAnswersState)

        round_ = self.current_round
        if round_.answer_for(player) is not None:
            return
        # 'ß'.upper() is 'SS': length, letters and lookup all use the folded word
        canonical = word.upper()
        if len(canonical) < MIN_WORD_LENGTH:
            raise ScrambleError(ErrorKind.WordMustBeAtLeastTwoLetters)
        if not dictionary.is_subset_of_letters(round_.letters, canonical):
            raise ScrambleError(ErrorKind.WordUsesExtraLetters)

        entry = dictionary.lookup(canonical)
        if entry is not None:
            round_.answers.append(AnsweredWord(
                player=player,
                submitted_word=word,
                score=self.settings.scoring_method.score(entry),
                definition=entry.definition,
            ))
            return

        used = round_.lookups_used.get(player, 0) + 1
        round_.lookups_used[player] = used
        if used > self.settings.lookup_allowance:
            round_.answers.append(AnsweredWord(player=player, submitted_word=word, score=0, definition=''))
            return
        raise ScrambleError(ErrorKind.WordNotInDictionary)

    def advance_round_if_complete(self, new_letters: List[str]) -> bool:
        if self.current_round_state() != RoundState.Complete:
            return False
        self.add_round(new_letters)
        return True

    def score(self, dictionary: DictionaryService, scoring_method: ScoringMethod) -> Dict[str, int]:
        # Re-scored from the dictionary on every read, stored answer scores are not used
        scores: Dict[str, int] = {}
        for round_ in self.rounds:
            for answer in round_.answers:
                total = scores.setdefault(answer.player, 0)
                entry = dictionary.lookup(answer.submitted_word)
                if entry is not None:
                    scores[answer.player] = total + scoring_method.score(entry)
        return scores

    def to_view(self) -> GameView:
        players = len(self.players)
        return GameView(
            players=sorted(self.players),
            rounds=[r.to_view(players) for r in self.rounds],
            settings=self.settings,
        )


class GameStore:
    """Games by id. Not synchronized; callers hold the manager's lock."""

    def __init__(self):
        self._games: Dict[str, Game] = {}

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._games

    def check_can_create(self, game_id: str, settings: GameSettings) -> None:
        if game_id in self._games:
            raise ScrambleError(ErrorKind.GameConflict)
        if not settings.is_valid():
            raise ScrambleError(ErrorKind.InvalidGameSettings)

    def create(self, game_id: str, initial_player: str, settings: GameSettings, letters: List[str]) -> Game:
        self.check_can_create(game_id, settings)
        game = Game(settings)
        game.add_round(letters)
        game.add_player(initial_player)
        self._games[game_id] = game
        logger.info('Created game %s for %s', game_id, initial_player)
        return game

    def get(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise ScrambleError(ErrorKind.GameNotFound)
        return game

    def find(self, game_id: str) -> Optional[Game]:
        return self._games.get(game_id)

    def delete(self, game_id: str) -> None:
        if self._games.pop(game_id, None) is not None:
            logger.info('Deleted game %s', game_id)
