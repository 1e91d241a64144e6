"""Tests for word list loading, matching, ranking and tile draws"""

import random
import tempfile
import unittest
from pathlib import Path

from scramble.dictionary import DictionaryService, parse_word_list
from scramble.errors import DictionaryLoadError
from scramble.schemas import ScoringMethod

WORD_LIST = Path(__file__).parent / 'data' / 'word-list.txt'


class RotatingRandom(random.Random):
    def shuffle(self, x):
        x.append(x.pop(0))


class TestLoad(unittest.TestCase):
    def test_read_words(self):
        words = DictionaryService.load(WORD_LIST)
        self.assertEqual(words.lookup('zeugma').score, 18)
        self.assertIsNone(words.lookup('notaword'))

    def test_lookup_is_case_insensitive(self):
        words = DictionaryService.load(WORD_LIST)
        entry = words.lookup('ScRaMbLe')
        self.assertEqual(entry.word, 'SCRAMBLE')
        self.assertEqual(entry.score, 14)
        self.assertEqual(entry.definition, 'to move or climb hurriedly')

    def test_missing_file_is_fatal(self):
        with self.assertRaises(DictionaryLoadError):
            DictionaryService.load(WORD_LIST.with_name('missing.txt'))

    def test_line_without_tab_is_fatal(self):
        with self.assertRaises(DictionaryLoadError) as ctx:
            parse_word_list(['AA\tlava', 'BROKEN LINE'], 'words.txt')
        self.assertIn('words.txt:2', str(ctx.exception))

    def test_empty_word_is_fatal(self):
        with self.assertRaises(DictionaryLoadError):
            parse_word_list(['\tno word here'])

    def test_blank_lines_skipped(self):
        entries = parse_word_list(['AA\tlava\n', '\n', 'AB\tmuscle\r\n'])
        self.assertEqual(sorted(entries), ['AA', 'AB'])
        self.assertEqual(entries['AB'].definition, 'muscle')

    def test_empty_word_list_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'empty.txt'
            path.write_text('', encoding='utf-8')
            with self.assertRaises(DictionaryLoadError):
                DictionaryService.load(path)


class TestSubsetOfLetters(unittest.TestCase):
    def test_repeated_letters(self):
        letters = ['A', 'A', 'B']
        self.assertTrue(DictionaryService.is_subset_of_letters(letters, 'AA'))
        self.assertTrue(DictionaryService.is_subset_of_letters(letters, 'AB'))
        self.assertFalse(DictionaryService.is_subset_of_letters(letters, 'AAA'))
        self.assertFalse(DictionaryService.is_subset_of_letters(letters, 'ABB'))

    def test_absent_letter(self):
        self.assertFalse(DictionaryService.is_subset_of_letters(['A', 'B'], 'AC'))

    def test_case_insensitive(self):
        self.assertTrue(DictionaryService.is_subset_of_letters(list('SCRAMBLE'), 'scramble'))
        self.assertTrue(DictionaryService.is_subset_of_letters(list('scramble'), 'MARBLE'))
        self.assertFalse(DictionaryService.is_subset_of_letters(list('SCRAMBLE'), 'bell'))


class TestBestWords(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.words = DictionaryService.load(WORD_LIST, scan_yield_interval=7)

    async def test_sorted_and_truncated(self):
        best = await self.words.best_words(list('SCRAMBLE'), 4, ScoringMethod.Normal)
        self.assertEqual([e.word for e in best], ['SCRAMBLE', 'MARBLE', 'RAMBLE', 'AMBLE'])
        scores = [e.score for e in best]
        self.assertEqual(scores, sorted(scores, reverse=True))

    async def test_only_fitting_words(self):
        best = await self.words.best_words(list('SCRAMBLE'), 1000)
        self.assertTrue(best)
        for entry in best:
            self.assertTrue(self.words.is_subset_of_letters(list('SCRAMBLE'), entry.word))
        self.assertNotIn('BELL', [e.word for e in best])

    async def test_length_scoring(self):
        words = DictionaryService.from_lines(['ZA\tpizza', 'EASEL\ta stand', 'SEA\tthe ocean'])
        letters = list('ZAEASEL')
        normal = await words.best_words(letters, 10, ScoringMethod.Normal)
        self.assertEqual([e.word for e in normal], ['ZA', 'EASEL', 'SEA'])
        by_length = await words.best_words(letters, 10, ScoringMethod.Length)
        self.assertEqual([e.word for e in by_length], ['EASEL', 'SEA', 'ZA'])

    async def test_repeatable(self):
        first = await self.words.best_words(list('SCRAMBLE'), 10)
        second = await self.words.best_words(list('SCRAMBLE'), 10)
        self.assertEqual(first, second)

    async def test_no_fit(self):
        self.assertEqual(await self.words.best_words(['Q', 'V'], 5), [])


class TestDrawTiles(unittest.TestCase):
    def setUp(self):
        self.words = DictionaryService.load(WORD_LIST, rng=random.Random(1234))

    def test_draws_are_playable(self):
        for size in (2, 3, 7, 12):
            letters = self.words.draw_tiles(size)
            self.assertEqual(len(letters), size)
            self.assertTrue(self.words.is_playable(letters))
            self.assertIsNotNone(self.words.shortest_fit(letters))

    def test_banned_letters_never_drawn(self):
        for _ in range(20):
            letters = self.words.draw_tiles(7, {'e', 'a'})
            self.assertNotIn('E', letters)
            self.assertNotIn('A', letters)

    def test_draw_respects_bag_counts(self):
        letters = self.words.draw_tiles(98)
        self.assertEqual(letters.count('Z'), 1)
        self.assertEqual(letters.count('E'), 12)

    def test_seeded_draws_repeat(self):
        a = DictionaryService.load(WORD_LIST, rng=random.Random(7)).draw_tiles(7)
        b = DictionaryService.load(WORD_LIST, rng=random.Random(7)).draw_tiles(7)
        self.assertEqual(a, b)

    def test_rejected_draws_are_logged(self):
        # only I and Q left in the bag; the rotation reaches [I, Q] on the eighth draw
        banned = set('ABCDEFGHJKLMNOPRSTUVWXYZ')
        words = DictionaryService.from_lines(['QI\tvital force'], draw_warn_attempts=1, rng=RotatingRandom())
        with self.assertLogs('scramble.dictionary', level='WARNING') as logs:
            letters = words.draw_tiles(2, banned)
        self.assertEqual(sorted(letters), ['I', 'Q'])
        self.assertEqual(len(logs.records), 7)

    def test_bag_without_any_word_cannot_draw(self):
        # only Q and Z left; no word in the list is spelled from them
        banned = set('ABCDEFGHIJKLMNOPRSTUVWXY')
        self.assertFalse(self.words.can_draw(2, banned))
        with self.assertRaises(ValueError):
            self.words.draw_tiles(2, banned)

    def test_can_draw(self):
        self.assertTrue(self.words.can_draw(2))
        self.assertTrue(self.words.can_draw(2, set('ABCDEFGHJKLMNOPRSTUVWXYZ')))
        self.assertFalse(self.words.can_draw(1))
        self.assertFalse(self.words.can_draw(99))


if __name__ == '__main__':
    unittest.main()
