"""
Resynchronization strategies.

After the front lines of the two sources disagree, a strategy decides how
many lines to drop from each so that their fronts agree again. Only the
lookahead window of each source is ever examined.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from .config import STRATEGY_LCS, STRATEGY_NAIVE
from .input_controller import LineSource
from .logger import logger
from .models import AlignmentTally, DiffRegion
from .utils import SequenceAligner


class LostSyncError(Exception):
    """Raised when no matching line pair exists inside the lookahead window."""

    def __init__(self, depth: int):
        super().__init__(f"lost sync: no common line within {depth} lines of lookahead")
        self.depth = depth


class ResyncStrategy(ABC):
    """Abstract base class for resync strategies."""

    name = ""

    def resync(self, source_a: LineSource, source_b: LineSource) -> DiffRegion:
        """
        Finds the region to report so both sources line up again.

        Args:
            source_a (LineSource): Stream 1, filled, front differs from stream 2.
            source_b (LineSource): Stream 2, filled.

        Returns:
            DiffRegion: Lines to drop from each source. Afterwards the fronts
            are equal, or a stream has ended.

        Raises:
            LostSyncError: If neither stream has ended and nothing in the
            window matches.
        """
        len_a, len_b = len(source_a), len(source_b)
        if source_a.at_end(0):
            return DiffRegion(0, len_b)
        if source_b.at_end(0):
            return DiffRegion(len_a, 0)

        region = self._search(source_a, source_b)
        if region is not None:
            logger.debug("%s resync: -%d +%d", self.name, region.removed, region.added)
            return region

        # Nothing left to realign against once a stream has ended
        if source_a.exhausted:
            logger.info("%s: ended without realigning, reporting its tail", source_a.name)
            return DiffRegion(len_a, 0)
        if source_b.exhausted:
            logger.info("%s: ended without realigning, reporting its tail", source_b.name)
            return DiffRegion(0, len_b)

        raise LostSyncError(max(source_a.depth, source_b.depth))

    @abstractmethod
    def _search(self, source_a: LineSource, source_b: LineSource) -> Optional[DiffRegion]:
        """Returns the resync region, or None if the window holds no match."""
        pass


class NaiveResync(ResyncStrategy):
    """
    Bounded brute-force search.

    Tries discard pairs of growing size ``cnt``: first (cnt, cnt), then
    (n, cnt) and (cnt, n) for n = 0..cnt-1. A pair is accepted only when the
    line after it matches too, so a single stray blank line cannot resync.
    """

    name = STRATEGY_NAIVE

    def _search(self, source_a, source_b):
        limit = max(source_a.depth, source_b.depth) - 1
        for cnt in range(1, limit + 1):
            if self._confirmed(source_a, source_b, cnt, cnt):
                return DiffRegion(cnt, cnt)
            for n in range(cnt):
                if self._confirmed(source_a, source_b, n, cnt):
                    return DiffRegion(n, cnt)
                if self._confirmed(source_a, source_b, cnt, n):
                    return DiffRegion(cnt, n)
        return None

    @staticmethod
    def _same(source_a, source_b, i, j):
        line_a = source_a.peek(i)
        line_b = source_b.peek(j)
        if line_a is None or line_b is None:
            return source_a.at_end(i) and source_b.at_end(j)
        return line_a == line_b

    def _confirmed(self, source_a, source_b, i, j):
        return (self._same(source_a, source_b, i, j)
                and self._same(source_a, source_b, i + 1, j + 1))


class LcsAlignedResync(ResyncStrategy):
    """
    Longest-common-subsequence alignment of both windows.

    Only the prefix of the alignment up to the first matched pair matters:
    the discards tallied before it are the region.
    """

    name = STRATEGY_LCS

    def _search(self, source_a, source_b):
        tally = SequenceAligner.traverse_sequences(
            source_a.window(),
            source_b.window(),
            AlignmentTally(),
            on_match=self._on_match,
            on_discard_a=self._on_discard_a,
            on_discard_b=self._on_discard_b,
        )
        if not tally.matched:
            return None
        return DiffRegion(tally.discard_a, tally.discard_b)

    @staticmethod
    def _on_match(tally: AlignmentTally, i: int, j: int) -> bool:
        tally.matched = True
        return True

    @staticmethod
    def _on_discard_a(tally: AlignmentTally, i: int) -> bool:
        tally.discard_a += 1
        return False

    @staticmethod
    def _on_discard_b(tally: AlignmentTally, j: int) -> bool:
        tally.discard_b += 1
        return False


STRATEGIES: Dict[str, Type[ResyncStrategy]] = {
    STRATEGY_NAIVE: NaiveResync,
    STRATEGY_LCS: LcsAlignedResync,
}


def make_strategy(name: str) -> ResyncStrategy:
    """Builds the strategy registered under ``name``."""
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"unknown resync strategy: {name!r}") from None
