"""Tests for clause selectors."""

import unittest

from folreasoner.core.logic import Variable, Constant, Function, Predicate, Literal, Clause
from folreasoner.proofs.state import ProofState
from folreasoner.selectors import (
    FIFOSelector, RatioSelector, SelectorRegistry, SmallestSelector, clause_priority, get_selector
)


class SelectorFixture(unittest.TestCase):

    def setUp(self):
        """Queue a long clause, a deep unit and a small unit, in that order."""
        P = Predicate('P', 1)
        Q = Predicate('Q', 1)
        f = Function('f', 1)
        a = Constant('a')
        x = Variable('x')

        self.state = ProofState()
        for clause in [
            Clause(Literal(P(x)), Literal(Q(x), False)),
            Clause(Literal(P(f(f(a))))),
            Clause(Literal(Q(a))),
        ]:
            self.state.add_unprocessed(clause)


class TestSmallestSelector(SelectorFixture):
    """Test cases for SmallestSelector."""

    def test_empty_state(self):
        """Test that an empty state gives no selection."""
        self.assertIsNone(SmallestSelector().select(ProofState()))

    def test_prefers_fewest_literals_then_size(self):
        """Test that the small unit clause wins."""
        self.assertEqual(SmallestSelector().select(self.state), 2)

    def test_ties_broken_by_age(self):
        """Test that equal weights pick the older clause."""
        state = ProofState()
        R = Predicate('R', 0)
        state.add_unprocessed(Clause(Literal(R())))
        state.add_unprocessed(Clause(Literal(R(), False)))
        self.assertEqual(SmallestSelector().select(state), 0)

    def test_priority(self):
        """Test the priority tuple."""
        clause = self.state.unprocessed[1]
        self.assertEqual(clause_priority(clause), (1, 4, 1))


class TestFIFOSelector(SelectorFixture):
    """Test cases for FIFOSelector."""

    def test_selects_oldest(self):
        """Test that FIFO always picks the first queued clause."""
        selector = FIFOSelector()
        self.assertEqual(selector.select(self.state), 0)
        self.assertIsNone(selector.select(ProofState()))


class TestRatioSelector(SelectorFixture):
    """Test cases for RatioSelector."""

    def test_age_pick_after_ratio_weight_picks(self):
        """Test the weight/age alternation."""
        selector = RatioSelector(ratio=2)
        picks = [selector.run(self.state) for _ in range(6)]
        self.assertEqual(picks, [2, 2, 0, 2, 2, 0])
        self.assertEqual(selector.stats['selections'], 6)

    def test_invalid_ratio(self):
        """Test that the ratio must be positive."""
        with self.assertRaises(ValueError):
            RatioSelector(ratio=0)


class TestSelectorRegistry(unittest.TestCase):
    """Test cases for the selector registry."""

    def test_default_selectors(self):
        """Test that the built-in selectors are registered."""
        self.assertEqual(sorted(SelectorRegistry().list_selectors()), ['fifo', 'ratio', 'smallest'])

    def test_get_selector(self):
        """Test creating selectors by name."""
        self.assertIsInstance(get_selector('Smallest'), SmallestSelector)
        ratio = get_selector('ratio', ratio=3)
        self.assertEqual(ratio.ratio, 3)
        self.assertEqual(ratio.name, 'ratio')

    def test_unknown_selector(self):
        """Test that unknown names are rejected."""
        with self.assertRaises(ValueError):
            get_selector('random')


if __name__ == '__main__':
    unittest.main()
