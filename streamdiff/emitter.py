import sys
from collections import deque
from typing import Optional, TextIO

from .config import DEFAULT_CONTEXT_LINES
from .input_controller import LineSource
from .models import DiffRegion, DiffSummary


class DiffEmitter:
    """
    Renders diff regions and their context in unified-diff style.

    Holds all the output bookkeeping: the precontext buffer of recent
    matching lines, the count of trailing context lines still owed, and the
    1-based line numbers of the oldest unprinted line in each stream.
    """

    def __init__(self, source_a: LineSource, source_b: LineSource,
                 context_lines: int = DEFAULT_CONTEXT_LINES, out: Optional[TextIO] = None):
        if context_lines < 0:
            raise ValueError(f"context lines must not be negative, got {context_lines}")
        self.source_a = source_a
        self.source_b = source_b
        self.context_lines = context_lines
        self.out = out if out is not None else sys.stdout

        self.precontext = deque()
        self.postcontext = 0
        self.line_no1 = 1
        self.line_no2 = 1
        self._started = False
        self._summary = DiffSummary()

    def emit_names(self, name_a: str, name_b: str) -> None:
        self._write("-", name_a)
        self._write("+", name_b)
        self.out.flush()

    def emit_region(self, region: DiffRegion) -> None:
        """
        Prints one region: header if needed, leading context, removed and added lines.

        A header is printed at the start of output, or when the precontext
        buffer is full, meaning there is a gap since the previous region.
        Otherwise the region continues the previous block.
        """
        if not self._started or len(self.precontext) == self.context_lines:
            self.out.write(f"@@ -{self.line_no1} +{self.line_no2} @@\n")
        self._started = True

        flushed = len(self.precontext)
        while self.precontext:
            self._write(" ", self.precontext.popleft())
        self.line_no1 += flushed
        self.line_no2 += flushed

        removed = self.source_a.pop(region.removed)
        for line in removed:
            self._write("-", line)
        added = self.source_b.pop(region.added)
        for line in added:
            self._write("+", line)
        self.line_no1 += len(removed)
        self.line_no2 += len(added)

        self._summary.regions += 1
        self._summary.removed += len(removed)
        self._summary.added += len(added)

        self.postcontext = self.context_lines
        if self.postcontext == 0:
            self.out.flush()

    def advance_match(self, line: str) -> None:
        """Accounts for one matching line pair outside any region."""
        if self.postcontext > 0:
            self._write(" ", line)
            self.line_no1 += 1
            self.line_no2 += 1
            self.postcontext -= 1
            if self.postcontext == 0:
                self.out.flush()
            return

        self.precontext.append(line)
        if len(self.precontext) > self.context_lines:
            self.precontext.popleft()
            self.line_no1 += 1
            self.line_no2 += 1

    def mark_lost_sync(self) -> None:
        self._summary.lost_sync = True

    def summary(self) -> DiffSummary:
        return self._summary

    def _write(self, prefix: str, line: str) -> None:
        self.out.write(prefix + line + "\n")
