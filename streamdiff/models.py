from dataclasses import dataclass


@dataclass(frozen=True)
class DiffRegion:
    """
    One mismatch event: how many lines to report from each stream.

    Attributes:
        removed (int): Lines pulled from stream 1 and printed with '-'.
        added (int): Lines pulled from stream 2 and printed with '+'.
    """
    removed: int
    added: int

    def __post_init__(self):
        if self.removed < 0 or self.added < 0:
            raise ValueError(f"negative region size: {self.removed}, {self.added}")
        if self.removed == 0 and self.added == 0:
            raise ValueError("empty diff region")


@dataclass
class AlignmentTally:
    """
    Accumulator threaded through the alignment callbacks.

    Attributes:
        discard_a (int): Lines of sequence A skipped before the first match.
        discard_b (int): Lines of sequence B skipped before the first match.
        matched (bool): Whether a matching pair was reached.
    """
    discard_a: int = 0
    discard_b: int = 0
    matched: bool = False


@dataclass
class DiffSummary:
    """Totals for one run of the engine."""
    regions: int = 0
    removed: int = 0
    added: int = 0
    lost_sync: bool = False

    @property
    def identical(self) -> bool:
        return self.regions == 0
