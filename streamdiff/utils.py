import difflib
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

# Callbacks return True to stop the traversal early.
MatchCallback = Callable[[T, int, int], Optional[bool]]
DiscardCallback = Callable[[T, int], Optional[bool]]


class SequenceAligner:
    """
    Static utility class for walking a longest-common-subsequence alignment.
    """

    @staticmethod
    def traverse_sequences(a: Sequence[str], b: Sequence[str], acc: T,
                           on_match: MatchCallback,
                           on_discard_a: DiscardCallback,
                           on_discard_b: DiscardCallback) -> T:
        """
        Walks the alignment of ``a`` and ``b`` in order, one element at a time.

        ``on_match(acc, i, j)`` fires for each aligned pair ``a[i] == b[j]``,
        ``on_discard_a(acc, i)`` for each element only in ``a`` and
        ``on_discard_b(acc, j)`` for each element only in ``b``. Within a
        changed block the ``a`` discards come first. Any callback returning
        True ends the walk.

        Returns:
            The accumulator, as left by the callbacks.
        """
        matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                for k in range(i2 - i1):
                    if on_match(acc, i1 + k, j1 + k):
                        return acc
                continue

            for i in range(i1, i2):
                if on_discard_a(acc, i):
                    return acc
            for j in range(j1, j2):
                if on_discard_b(acc, j):
                    return acc
        return acc
