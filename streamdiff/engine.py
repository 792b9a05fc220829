from .emitter import DiffEmitter
from .input_controller import LineSource
from .logger import logger
from .models import DiffRegion, DiffSummary
from .resync import LostSyncError, ResyncStrategy


class StreamDiffEngine:
    """
    Main loop comparing two line streams through their lookahead windows.
    """

    def __init__(self, source_a: LineSource, source_b: LineSource,
                 strategy: ResyncStrategy, emitter: DiffEmitter):
        self.source_a = source_a
        self.source_b = source_b
        self.strategy = strategy
        self.emitter = emitter

    def run(self) -> DiffSummary:
        """
        Diffs both streams to the end.

        Matching front lines are consumed one pair at a time and fed to the
        emitter's context logic. On a mismatch the strategy picks the region
        and the emitter prints it, consuming those lines.

        Returns:
            DiffSummary: Totals for the run.

        Raises:
            LostSyncError: After the remaining windows have been printed as
            one region.
        """
        self.emitter.emit_names(self.source_a.name, self.source_b.name)
        try:
            while True:
                self.source_a.fill()
                self.source_b.fill()

                line_a = self.source_a.peek(0)
                line_b = self.source_b.peek(0)
                if line_a is None and line_b is None:
                    break

                if line_a is not None and line_a == line_b:
                    self.source_a.pop(1)
                    self.source_b.pop(1)
                    self.emitter.advance_match(line_a)
                    continue

                self.emitter.emit_region(self.strategy.resync(self.source_a, self.source_b))
        except LostSyncError as e:
            logger.error("%s; dumping %d and %d buffered lines",
                         e, len(self.source_a), len(self.source_b))
            self.emitter.emit_region(DiffRegion(len(self.source_a), len(self.source_b)))
            self.emitter.mark_lost_sync()
            raise
        finally:
            self.emitter.out.flush()

        summary = self.emitter.summary()
        logger.info("Done: %d region(s), -%d +%d lines",
                    summary.regions, summary.removed, summary.added)
        return summary
