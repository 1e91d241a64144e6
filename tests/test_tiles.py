"""Tests for the tile model"""

import unittest

from scramble.tiles import BAG_SIZE, LETTER_POINTS, TILES, generate_tile_bag, letter_score


class TestTiles(unittest.TestCase):
    def test_bag_totals(self):
        self.assertEqual(BAG_SIZE, 98)
        self.assertEqual(sum(t.points * t.count for t in TILES), 187)

    def test_every_letter_once(self):
        letters = [t.letter for t in TILES]
        self.assertEqual(sorted(letters), [chr(c) for c in range(ord('A'), ord('Z') + 1)])

    def test_point_range(self):
        for tile in TILES:
            self.assertGreaterEqual(tile.points, 1)
            self.assertLessEqual(tile.points, 10)

    def test_letter_score(self):
        self.assertEqual(letter_score('scramble'), 14)
        self.assertEqual(letter_score('BELL'), 6)
        self.assertEqual(letter_score('zeugma'), 18)
        # characters without a tile add nothing
        self.assertEqual(letter_score("it's"), LETTER_POINTS['I'] + LETTER_POINTS['T'] + LETTER_POINTS['S'])

    def test_bag_respects_counts(self):
        bag = generate_tile_bag()
        self.assertEqual(len(bag), BAG_SIZE)
        self.assertEqual(bag.count('E'), 12)
        self.assertEqual(bag.count('Q'), 1)

    def test_banned_letters_removed(self):
        bag = generate_tile_bag(['e', 'Q'])
        self.assertNotIn('E', bag)
        self.assertNotIn('Q', bag)
        self.assertEqual(len(bag), BAG_SIZE - 13)


if __name__ == '__main__':
    unittest.main()
