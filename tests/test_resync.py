import io
import unittest

from streamdiff.input_controller import LineSource
from streamdiff.models import DiffRegion
from streamdiff.resync import (
    LcsAlignedResync, LostSyncError, NaiveResync, make_strategy,
)


def make_source(lines, depth=200, name="a"):
    source = LineSource(name, io.StringIO("".join(l + "\n" for l in lines)), depth)
    source.fill()
    return source


class ResyncCases:
    """Behaviour both strategies must agree on."""

    strategy_class = None

    def setUp(self):
        self.strategy = self.strategy_class()

    def resync(self, a, b, depth=200):
        return self.strategy.resync(make_source(a, depth, "a"), make_source(b, depth, "b"))

    def test_substitution(self):
        region = self.resync(["x", "c", "d"], ["y", "c", "d"])
        self.assertEqual(region, DiffRegion(1, 1))

    def test_insertion(self):
        region = self.resync(["c", "d", "e"], ["new", "c", "d", "e"])
        self.assertEqual(region, DiffRegion(0, 1))

    def test_deletion(self):
        region = self.resync(["old", "c", "d", "e"], ["c", "d", "e"])
        self.assertEqual(region, DiffRegion(1, 0))

    def test_uneven_replacement(self):
        region = self.resync(["x1", "x2", "c", "d"], ["y", "c", "d"])
        self.assertEqual(region, DiffRegion(2, 1))

    def test_fronts_agree_after_resync(self):
        a = ["a%d" % i for i in range(3)] + ["k%d" % i for i in range(10)]
        b = ["b%d" % i for i in range(5)] + ["k%d" % i for i in range(10)]
        source_a, source_b = make_source(a), make_source(b, name="b")
        region = self.strategy.resync(source_a, source_b)
        self.assertEqual(source_a.peek(region.removed), source_b.peek(region.added))

    def test_first_stream_ended(self):
        region = self.resync([], ["x", "y"])
        self.assertEqual(region, DiffRegion(0, 2))

    def test_second_stream_ended(self):
        region = self.resync(["x", "y", "z"], [])
        self.assertEqual(region, DiffRegion(3, 0))

    def test_tail_of_ended_stream_is_reported(self):
        # Stream 1 is done, stream 2 runs past the window: nothing to realign on
        a = ["last"]
        b = ["other %d" % i for i in range(20)]
        region = self.resync(a, b, depth=5)
        self.assertEqual(region, DiffRegion(1, 0))

    def test_lost_sync(self):
        a = ["a%d" % i for i in range(20)]
        b = ["b%d" % i for i in range(20)]
        with self.assertRaises(LostSyncError) as ctx:
            self.resync(a, b, depth=4)
        self.assertEqual(ctx.exception.depth, 4)

    def test_match_beyond_window_is_lost_sync(self):
        a = ["a%d" % i for i in range(10)] + ["same"] * 5
        b = ["b%d" % i for i in range(10)] + ["same"] * 5
        with self.assertRaises(LostSyncError):
            self.resync(a, b, depth=8)


class TestNaiveResync(ResyncCases, unittest.TestCase):
    strategy_class = NaiveResync

    def test_single_line_coincidence_is_not_enough(self):
        # "" lines up at (1, 0) but the following lines differ
        a = ["A", "", "B", "C", "D"]
        b = ["", "Z", "B", "C", "D"]
        self.assertEqual(self.resync(a, b), DiffRegion(2, 2))

    def test_substitution_tried_before_insertion(self):
        # (1, 0) would also line up
        a = ["x", "c", "c", "c"]
        b = ["c", "c", "c", "c"]
        self.assertEqual(self.resync(a, b), DiffRegion(1, 1))

    def test_smallest_window_wins(self):
        a = ["x", "p", "q", "r", "s"]
        b = ["p", "q", "y", "z", "r", "s"]
        self.assertEqual(self.resync(a, b), DiffRegion(1, 0))


class TestLcsAlignedResync(ResyncCases, unittest.TestCase):
    strategy_class = LcsAlignedResync

    def test_stops_at_first_match(self):
        a = ["A", "", "B", "C", "D"]
        b = ["", "Z", "B", "C", "D"]
        self.assertEqual(self.resync(a, b), DiffRegion(1, 0))


class TestMakeStrategy(unittest.TestCase):
    def test_names(self):
        self.assertIsInstance(make_strategy("naive"), NaiveResync)
        self.assertIsInstance(make_strategy("lcs"), LcsAlignedResync)

    def test_unknown(self):
        with self.assertRaises(ValueError):
            make_strategy("patience")


if __name__ == '__main__':
    unittest.main()
