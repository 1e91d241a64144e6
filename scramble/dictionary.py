from __future__ import annotations
import asyncio
import logging
import random
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .errors import DictionaryLoadError
from .schemas import ScoringMethod, WordInfo
from .tiles import generate_tile_bag, letter_score

logger = logging.getLogger(__name__)

DEFAULT_SCAN_YIELD_INTERVAL = 1000
DEFAULT_DRAW_WARN_ATTEMPTS = 100


@dataclass(frozen=True)
class WordEntry:
    word: str
    definition: str
    score: int

    def to_info(self) -> WordInfo:
        return WordInfo(word=self.word, score=self.score, definition=self.definition)


def _fits(counts: Counter, word: str) -> bool:
    remaining = counts.copy()
    for ch in word.upper():
        if remaining[ch] <= 0:
            return False
        remaining[ch] -= 1
    return True


def parse_word_list(lines: Iterable[str], source: str = '<memory>') -> Dict[str, WordEntry]:
    """Parse ``WORD<TAB>definition`` lines into entries keyed by uppercase word.

    Blank lines are skipped. Any other line without a tab, or with an empty
    word, aborts the load.
    """
    entries: Dict[str, WordEntry] = {}
    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')
        if not line.strip():
            continue
        word, sep, definition = line.partition('\t')
        word = word.strip().upper()
        if not sep or not word:
            raise DictionaryLoadError(f'{source}:{lineno}: expected WORD<TAB>definition, got {line!r}')
        entries[word] = WordEntry(word=word, definition=definition.strip(), score=letter_score(word))
    return entries


class DictionaryService:
    """Playable words plus the weighted tile bag they are drawn against.

    Read-only once built, so coroutines and threads may share one instance
    without locking.
    """

    def __init__(
        self,
        entries: Dict[str, WordEntry],
        *,
        scan_yield_interval: int = DEFAULT_SCAN_YIELD_INTERVAL,
        draw_warn_attempts: int = DEFAULT_DRAW_WARN_ATTEMPTS,
        rng: Optional[random.Random] = None,
    ):
        if not entries:
            raise DictionaryLoadError('word list is empty')
        self._words: Dict[str, WordEntry] = dict(entries)
        # Shortest words first: a playability check usually stops on a 2-3 letter word
        self._by_length: List[WordEntry] = sorted(self._words.values(), key=lambda e: (len(e.word), e.word))
        self._scan_yield_interval = max(1, scan_yield_interval)
        self._draw_warn_attempts = max(1, draw_warn_attempts)
        self._rng = rng or random.Random()

    @classmethod
    def load(cls, source: Union[str, Path], **kwargs) -> DictionaryService:
        path = Path(source)
        try:
            with path.open('r', encoding='utf-8') as f:
                entries = parse_word_list(f, str(path))
        except OSError as exc:
            raise DictionaryLoadError(f'cannot read word list {path}: {exc}') from exc
        except UnicodeDecodeError as exc:
            raise DictionaryLoadError(f'word list {path} is not valid UTF-8: {exc}') from exc
        logger.info('Loaded %d words from %s', len(entries), path)
        return cls(entries, **kwargs)

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs) -> DictionaryService:
        return cls(parse_word_list(lines), **kwargs)

    def __len__(self) -> int:
        return len(self._words)

    def lookup(self, word: str) -> Optional[WordEntry]:
        if not word:
            return None
        return self._words.get(word.upper())

    @staticmethod
    def is_subset_of_letters(letters: Iterable[str], word: str) -> bool:
        """True when ``word`` can be spelled from ``letters``, each tile used at most once."""
        return _fits(Counter(ch.upper() for ch in letters), word)

    def shortest_fit(self, letters: Iterable[str]) -> Optional[WordEntry]:
        counts = Counter(ch.upper() for ch in letters)
        size = sum(counts.values())
        for entry in self._by_length:
            if len(entry.word) > size:
                break
            if _fits(counts, entry.word):
                return entry
        return None

    def is_playable(self, letters: Iterable[str]) -> bool:
        return self.shortest_fit(letters) is not None

    def can_draw(self, size: int, banned_letters: Iterable[str] = ()) -> bool:
        """True when some word of at most ``size`` letters can be spelled from the bag.

        Without such a word ``draw_tiles`` could never accept a draw.
        """
        counts = Counter(generate_tile_bag(banned_letters))
        if size < 1 or size > sum(counts.values()):
            return False
        for entry in self._by_length:
            if len(entry.word) > size:
                break
            if _fits(counts, entry.word):
                return True
        return False

    async def best_words(
        self,
        letters: Iterable[str],
        limit: int,
        scoring_method: ScoringMethod = ScoringMethod.Normal,
    ) -> List[WordEntry]:
        """Top ``limit`` words spellable from ``letters``, best first.

        Full scan of the word list. Yields to the event loop every
        ``scan_yield_interval`` entries so request handlers keep running.
        Equal scores are ordered by word.
        """
        counts = Counter(ch.upper() for ch in letters)
        matches: List[WordEntry] = []
        for i, entry in enumerate(self._words.values(), start=1):
            if _fits(counts, entry.word):
                matches.append(entry)
            if i % self._scan_yield_interval == 0:
                await asyncio.sleep(0)
        matches.sort(key=lambda e: (-scoring_method.score(e), e.word))
        return matches[:limit]

    def draw_tiles(self, size: int, banned_letters: Iterable[str] = ()) -> List[str]:
        """Draw ``size`` tiles without replacement, retrying until some word fits.

        Raises ``ValueError`` when no draw of that size can ever fit a word.
        """
        banned = sorted({b.upper() for b in banned_letters})
        if not self.can_draw(size, banned):
            raise ValueError(f'no word fits {size} tiles drawn without {"".join(banned) or "any banned letters"}')
        bag = generate_tile_bag(banned)
        attempts = 0
        while True:
            attempts += 1
            self._rng.shuffle(bag)
            letters = bag[:size]
            if self.is_playable(letters):
                return letters
            if attempts % self._draw_warn_attempts == 0:
                logger.warning(
                    'No playable word after %d draws of %d tiles (banned: %s)',
                    attempts, size, ''.join(banned) or 'none',
                )
