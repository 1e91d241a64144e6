from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class Tile:
    letter: str
    points: int
    count: int


# Standard English distribution without the two blanks: 98 tiles, 187 points
TILES = (
    Tile('E', 1, 12), Tile('A', 1, 9), Tile('I', 1, 9), Tile('O', 1, 8),
    Tile('N', 1, 6), Tile('R', 1, 6), Tile('T', 1, 6), Tile('L', 1, 4),
    Tile('S', 1, 4), Tile('U', 1, 4), Tile('D', 2, 4), Tile('G', 2, 3),
    Tile('B', 3, 2), Tile('C', 3, 2), Tile('M', 3, 2), Tile('P', 3, 2),
    Tile('F', 4, 2), Tile('H', 4, 2), Tile('V', 4, 2), Tile('W', 4, 2),
    Tile('Y', 4, 2), Tile('K', 5, 1), Tile('J', 8, 1), Tile('X', 8, 1),
    Tile('Q', 10, 1), Tile('Z', 10, 1),
)

LETTER_POINTS: Dict[str, int] = {t.letter: t.points for t in TILES}

BAG_SIZE = sum(t.count for t in TILES)


def letter_score(word: str) -> int:
    """Sum of tile points for ``word``; characters without a tile score 0."""
    return sum(LETTER_POINTS.get(ch, 0) for ch in word.upper())


def generate_tile_bag(banned_letters: Iterable[str] = ()) -> List[str]:
    banned = {b.upper() for b in banned_letters}
    bag: List[str] = []
    for tile in TILES:
        if tile.letter not in banned:
            bag.extend([tile.letter] * tile.count)
    return bag
