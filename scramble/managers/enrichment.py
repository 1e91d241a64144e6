from __future__ import annotations
import asyncio
import logging
from typing import TYPE_CHECKING, List, Set

from ..dictionary import DictionaryService
from ..schemas import ScoringMethod

if TYPE_CHECKING:
    from .game import GameManager

logger = logging.getLogger(__name__)


class EnrichmentManager:
    """Runs the best-answer search for new rounds off the request path.

    One task per round. The search itself never touches the store; the
    result goes back through ``GameManager.attach_best_answers`` which takes
    the store lock.
    """

    def __init__(self, dictionary: DictionaryService, limit: int):
        self.dictionary = dictionary
        self.limit = limit
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(
        self,
        games: GameManager,
        game_id: str,
        round_index: int,
        letters: List[str],
        scoring_method: ScoringMethod,
    ) -> asyncio.Task:
        task = asyncio.create_task(
            self._run(games, game_id, round_index, list(letters), scoring_method),
            name=f'best-answers:{game_id}:{round_index}',
        )
        # keep a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def _run(
        self,
        games: GameManager,
        game_id: str,
        round_index: int,
        letters: List[str],
        scoring_method: ScoringMethod,
    ):
        best = await self.dictionary.best_words(letters, self.limit, scoring_method)
        await games.attach_best_answers(game_id, round_index, letters, best)

    def _on_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error('Best answer search %s failed', task.get_name(), exc_info=exc)

    async def drain(self):
        """Wait until every scheduled search, including ones scheduled meanwhile, is done.

        Shutdown does not wait; it uses ``cancel_all``.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self):
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
