import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mcmc_maze.core.path import Move, Path, Proposal, SUBSTITUTE, APPEND, TRUNCATE, TRANSPOSE

class FixedKindRandom(random.Random):
    """Forces the edit kind (the first randrange(4) of each candidate) while keeping other draws random."""
    def __init__(self, kind, seed=0):
        super().__init__(seed)
        self.kind = kind

    def randrange(self, *args, **kwargs):
        if args == (4,):
            return self.kind
        return super().randrange(*args, **kwargs)

class TestMove(unittest.TestCase):
    def test_arbitrary_covers_all_outcomes(self):
        rng = random.Random(5)
        outcomes = {Move.arbitrary(rng) for _ in range(500)}
        self.assertEqual(outcomes, {Move.NORTH, Move.EAST, Move.SOUTH, Move.WEST, None})

class TestPath(unittest.TestCase):
    def setUp(self):
        self.path = Path([Move.NORTH, Move.EAST, None, Move.SOUTH, Move.WEST])

    def test_candidate_does_not_modify_original(self):
        rng = random.Random(0)
        before = list(self.path.moves)
        for _ in range(100):
            self.path.candidate(rng)
        self.assertEqual(self.path.moves, before)

    def test_substitute(self):
        for seed in range(20):
            out = self.path.candidate(FixedKindRandom(SUBSTITUTE, seed))
            self.assertEqual(len(out), len(self.path))
            diffs = sum(1 for a, b in zip(out, self.path) if a != b)
            self.assertLessEqual(diffs, 1)

    def test_append(self):
        out = self.path.candidate(FixedKindRandom(APPEND))
        self.assertEqual(len(out), len(self.path) + 1)
        self.assertEqual(out.moves[:-1], self.path.moves)

    def test_truncate(self):
        out = self.path.candidate(FixedKindRandom(TRUNCATE))
        self.assertEqual(out.moves, self.path.moves[:-1])

    def test_transpose(self):
        for seed in range(20):
            out = self.path.candidate(FixedKindRandom(TRANSPOSE, seed))
            self.assertEqual(sorted(out, key=repr), sorted(self.path, key=repr))
            diffs = sum(1 for a, b in zip(out, self.path) if a != b)
            self.assertIn(diffs, (0, 2))

    def test_empty_path_edits(self):
        empty = Path()
        self.assertEqual(empty.candidate(FixedKindRandom(SUBSTITUTE)), empty)
        self.assertEqual(empty.candidate(FixedKindRandom(TRUNCATE)), empty)
        self.assertEqual(empty.candidate(FixedKindRandom(TRANSPOSE)), empty)
        self.assertEqual(len(empty.candidate(FixedKindRandom(APPEND))), 1)

    def test_length_changes_by_at_most_one(self):
        rng = random.Random(9)
        current = Path()
        for _ in range(1000):
            nxt = current.candidate(rng)
            self.assertLessEqual(abs(len(nxt) - len(current)), 1)
            current = nxt

    def test_is_a_proposal(self):
        self.assertIsInstance(self.path, Proposal)
        self.assertIsInstance(self.path.candidate(random.Random(0)), Path)

    def test_repr(self):
        self.assertEqual(repr(self.path), "Path('NE.SW')")

if __name__ == '__main__':
    unittest.main()
