from __future__ import annotations
import asyncio
import logging
from typing import Dict, List, Optional

from ..dictionary import DictionaryService, WordEntry
from ..errors import ErrorKind, ScrambleError
from ..game_logic import Game, GameStore, RoundState
from ..schemas import GameSettings, GameView
from .enrichment import EnrichmentManager

logger = logging.getLogger(__name__)

DEFAULT_BEST_ANSWERS_LIMIT = 10


class GameManager:
    """All games behind one lock.

    Every operation holds ``lock`` for exactly one state transition. Socket.IO
    broadcasts go out after the lock is released.
    """

    def __init__(self, dictionary: DictionaryService, sio=None, *, best_answers_limit: int = DEFAULT_BEST_ANSWERS_LIMIT):
        self.dictionary = dictionary
        self.sio = sio
        self.store = GameStore()
        self.lock = asyncio.Lock()
        self.enrichment = EnrichmentManager(dictionary, best_answers_limit)

    async def create_game(self, game_id: str, player: str, settings: GameSettings):
        async with self.lock:
            # checked before drawing: with no word spellable from what is left in the bag the draw would never end
            self.store.check_can_create(game_id, settings)
            if not self.dictionary.can_draw(settings.tile_count, settings.banned_letters):
                raise ScrambleError(ErrorKind.InvalidGameSettings)
            letters = self.dictionary.draw_tiles(settings.tile_count, settings.banned_letters)
            game = self.store.create(game_id, player, settings, letters)
            self._schedule_best_answers(game_id, game)
            state = game.to_view()
        await self._broadcast(game_id, state)

    async def join_game(self, game_id: str, player: str):
        async with self.lock:
            game = self.store.get(game_id)
            game.add_player(player)
            state = game.to_view()
        await self._broadcast(game_id, state)

    async def leave_game(self, game_id: str, player: str):
        async with self.lock:
            game = self.store.get(game_id)
            game.remove_player(player)
            state = game.to_view()
        await self._broadcast(game_id, state)

    async def submit_answer(self, game_id: str, player: str, word: str):
        async with self.lock:
            game = self.store.get(game_id)
            game.submit_answer(player, word, self.dictionary)
            if game.current_round_state() == RoundState.Complete:
                settings = game.settings
                letters = self.dictionary.draw_tiles(settings.tile_count, settings.banned_letters)
                if game.advance_round_if_complete(letters):
                    logger.info('Game %s advanced to round %d', game_id, len(game.rounds))
                    self._schedule_best_answers(game_id, game)
            state = game.to_view()
        await self._broadcast(game_id, state)

    async def delete_game(self, game_id: str):
        async with self.lock:
            self.store.delete(game_id)
        if self.sio is not None:
            await self.sio.emit('game:deleted', game_id, room=game_id)

    async def get_game(self, game_id: str) -> GameView:
        async with self.lock:
            return self.store.get(game_id).to_view()

    async def get_score(self, game_id: str) -> Dict[str, int]:
        async with self.lock:
            game = self.store.get(game_id)
            return game.score(self.dictionary, game.settings.scoring_method)

    async def attach_best_answers(self, game_id: str, round_index: int, letters: List[str], best: List[WordEntry]) -> bool:
        """Store a finished search on its round; dropped if the round is gone."""
        async with self.lock:
            game: Optional[Game] = self.store.find(game_id)
            if game is None or round_index >= len(game.rounds):
                logger.debug('Discarding best answers for %s round %d: round no longer exists', game_id, round_index)
                return False
            round_ = game.rounds[round_index]
            # same id may have been deleted and recreated with other tiles
            if round_.letters != letters or round_.best_answers:
                logger.debug('Discarding best answers for %s round %d: round changed', game_id, round_index)
                return False
            round_.best_answers = list(best)
            state = game.to_view()
        logger.debug('Attached %d best answers to %s round %d', len(best), game_id, round_index)
        await self._broadcast(game_id, state)
        return True

    def _schedule_best_answers(self, game_id: str, game: Game):
        self.enrichment.schedule(
            self,
            game_id,
            len(game.rounds) - 1,
            list(game.current_round.letters),
            game.settings.scoring_method,
        )

    async def _broadcast(self, game_id: str, state: GameView):
        if self.sio is None:
            return
        await self.sio.emit('game:state', state.model_dump(by_alias=True, mode='json'), room=game_id)

    async def shutdown(self):
        await self.enrichment.cancel_all()
