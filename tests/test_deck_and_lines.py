import itertools
import random
import unittest
from collections import Counter

from slots.Cards import BOMB, CROWN, DECK_COUNTS, DECK_SIZE, Card, buildDeck, containsBomb, shuffled
from slots.Deck import DeckManager
from slots.Lines import LINES, describeSelection, evaluateLine, isLine


def cards(*symbols):
    return [Card(f"{s}_{i}", s) for i, s in enumerate(symbols)]


class CardModelTestCase(unittest.TestCase):
    def test_build_deck_matches_composition(self):
        deck = buildDeck()
        self.assertEqual(80, DECK_SIZE)
        self.assertEqual(DECK_SIZE, len(deck))
        self.assertEqual(DECK_COUNTS, dict(Counter(c.symbol for c in deck)))
        self.assertEqual(DECK_SIZE, len({c.id for c in deck}))

    def test_shuffled_returns_new_permutation(self):
        deck = buildDeck()
        mixed = shuffled(deck, random.Random(3))
        self.assertIsNot(deck, mixed)
        self.assertEqual(sorted(c.id for c in deck), sorted(c.id for c in mixed))

    def test_unknown_symbol_rejected(self):
        with self.assertRaises(ValueError):
            Card("x_0", "lemon")

    def test_contains_bomb_skips_empty_cells(self):
        self.assertFalse(containsBomb([None] + cards("bar", "seven")))
        self.assertTrue(containsBomb([None] + cards(BOMB)))


class DeckManagerTestCase(unittest.TestCase):
    def test_take_top_reshuffles_discard_when_empty(self):
        discard = cards(*(["cherry"] * 5))
        deck = DeckManager([], discard, random.Random(0))
        card = deck.takeTop()
        self.assertIsNotNone(card)
        self.assertEqual(4, deck.remaining())
        self.assertEqual(0, deck.discardCount())

    def test_take_top_from_front(self):
        pile = cards("bar", "seven", "jewel")
        deck = DeckManager(pile, cards("crown"))
        self.assertIs(pile[0], deck.takeTop())
        self.assertEqual(1, deck.discardCount())

    def test_exhausted_deck_yields_nothing(self):
        deck = DeckManager([], [])
        deck.ensureAvailable()
        self.assertIsNone(deck.takeTop())
        self.assertEqual([], deck.dealN(3))

    def test_deal_n_stops_early(self):
        deck = DeckManager(cards("bar"), cards("seven"), random.Random(0))
        dealt = deck.dealN(3)
        self.assertEqual(["bar", "seven"], [c.symbol for c in dealt])
        self.assertEqual(0, len(deck))

    def test_discard_ignores_empty_slots(self):
        deck = DeckManager()
        deck.discard(None, *cards("bar"), None)
        self.assertEqual(1, deck.discardCount())


class LineEvaluatorTestCase(unittest.TestCase):
    def test_canonical_lines_only(self):
        self.assertTrue(isLine([0, 1, 2]))
        self.assertFalse(isLine([0, 1, 3]))
        for triple in itertools.combinations(range(9), 3):
            self.assertEqual(triple in LINES, isLine(list(triple)), triple)
        for line in LINES:
            self.assertTrue(isLine(list(reversed(line))))

    def test_line_shape_rejections(self):
        self.assertFalse(isLine([0, 1]))
        self.assertFalse(isLine([0, 1, 2, 3]))
        self.assertFalse(isLine([0, 0, 1]))

    def test_three_crowns(self):
        result = evaluateLine(cards(CROWN, CROWN, CROWN))
        self.assertTrue(result.ok)
        self.assertEqual(1000, result.points)
        self.assertEqual("3 Crowns", result.label)

    def test_wild_resolution(self):
        result = evaluateLine(cards(CROWN, "diamond", "diamond"))
        self.assertEqual((True, 500, "3 Diamonds"), tuple(result))
        self.assertFalse(evaluateLine(cards("diamond", "present", CROWN)).ok)

    def test_two_crowns_take_the_remaining_symbol(self):
        self.assertEqual(100, evaluateLine(cards(CROWN, "cherry", CROWN)).points)
        self.assertEqual("3 Cherries", evaluateLine(cards(CROWN, "cherry", CROWN)).label)

    def test_labels(self):
        self.assertEqual("3 7s", evaluateLine(cards("seven", "seven", "seven")).label)
        self.assertEqual("3 BARs", evaluateLine(cards("bar", "bar", CROWN)).label)
        self.assertEqual("3 Presents", evaluateLine(cards("present", "present", "present")).label)
        jewels = evaluateLine(cards("jewel", "jewel", "jewel"))
        self.assertEqual((True, 0, "3 Jewels (0)"), tuple(jewels))

    def test_bomb_veto(self):
        for other in DECK_COUNTS:
            self.assertFalse(evaluateLine(cards(BOMB, other, other)).ok)
        self.assertFalse(evaluateLine(cards(CROWN, CROWN, BOMB)).ok)

    def test_describe_selection(self):
        grid = cards("seven", "seven", CROWN, "bar", "bar", "jewel", "cherry", "cherry", "cherry")
        self.assertEqual("Select 3 cards", describeSelection([0, 1], grid).label)
        self.assertEqual("Selection must be a straight line", describeSelection([0, 1, 3], grid).label)
        info = describeSelection([0, 1, 2], grid)
        self.assertTrue(info.validLine)
        self.assertTrue(info.ok)
        self.assertEqual(300, info.points)
        grid[7] = None
        info = describeSelection([6, 7, 8], grid)
        self.assertTrue(info.validLine)
        self.assertFalse(info.ok)
        self.assertEqual("Invalid selection", info.label)


if __name__ == "__main__":
    unittest.main()
