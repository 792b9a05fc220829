import shlex
import subprocess
import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, List, Optional, TextIO

from .config import COMMAND_SUFFIX, DEFAULT_LOOKAHEAD_DEPTH, STDIN_SPECIFIER
from .logger import logger


class StreamOpenError(Exception):
    """Raised when a stream specifier cannot be opened or launched."""

    def __init__(self, specifier: str, reason: str):
        super().__init__(f"cannot open {specifier}: {reason}")
        self.specifier = specifier
        self.reason = reason


class LineSource:
    """
    Bounded lookahead over one ordered line stream.

    Lines are read on demand until the buffer holds ``depth`` lines or the
    stream runs out, and consumed from the front. Line terminators are
    stripped on read.
    """

    def __init__(self, name: str, stream: TextIO, depth: int = DEFAULT_LOOKAHEAD_DEPTH,
                 on_close: Optional[Callable[[], None]] = None):
        if depth < 1:
            raise ValueError(f"lookahead depth must be positive, got {depth}")
        self.name = name
        self.depth = depth
        self._stream = stream
        self._on_close = on_close
        self._buffer = deque()
        self.exhausted = False

    def __len__(self) -> int:
        return len(self._buffer)

    def fill(self) -> None:
        """Reads until the buffer is full or the stream is exhausted."""
        while not self.exhausted and len(self._buffer) < self.depth:
            line = self._stream.readline()
            if not line:
                self.exhausted = True
                logger.debug("%s: end of stream", self.name)
                break
            if line.endswith("\n"):
                line = line[:-1]
            self._buffer.append(line)

    def peek(self, offset: int = 0) -> Optional[str]:
        """Returns the line at ``offset`` from the front, or None past the buffered lines."""
        if 0 <= offset < len(self._buffer):
            return self._buffer[offset]
        return None

    def at_end(self, offset: int) -> bool:
        """True if ``offset`` lies past the last line the stream will ever produce."""
        return self.exhausted and offset >= len(self._buffer)

    def pop(self, n: int = 1) -> List[str]:
        """Removes and returns up to ``n`` lines from the front."""
        n = min(n, len(self._buffer))
        return [self._buffer.popleft() for _ in range(n)]

    def window(self) -> List[str]:
        return list(self._buffer)

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
            self._on_close = None


class StreamOpener(ABC):
    """Abstract base class for stream openers."""

    @abstractmethod
    def open(self, specifier: str, depth: int) -> LineSource:
        """
        Establishes the stream named by ``specifier``.

        Args:
            specifier (str): The stream specifier given on the command line.
            depth (int): Lookahead depth for the returned source.

        Returns:
            LineSource: A source positioned at the first line.

        Raises:
            StreamOpenError: If the stream cannot be established.
        """
        pass


class FileOpener(StreamOpener):
    """Opens a plain file."""

    def open(self, specifier: str, depth: int) -> LineSource:
        try:
            f = open(specifier, 'r', encoding='utf-8', errors='surrogateescape')
        except OSError as e:
            raise StreamOpenError(specifier, e.strerror or str(e)) from e
        return LineSource(specifier, f, depth, on_close=f.close)


class StdinOpener(StreamOpener):
    """Reads standard input; it is never closed here."""

    def open(self, specifier: str, depth: int) -> LineSource:
        return LineSource(specifier, sys.stdin, depth)


class CommandOpener(StreamOpener):
    """Launches ``cmd args |`` and reads its standard output."""

    def open(self, specifier: str, depth: int) -> LineSource:
        command = specifier.rstrip()[:-len(COMMAND_SUFFIX)].strip()
        try:
            argv = shlex.split(command)
        except ValueError as e:
            raise StreamOpenError(specifier, str(e)) from e
        if not argv:
            raise StreamOpenError(specifier, "empty command")

        try:
            proc = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='surrogateescape',
            )
        except OSError as e:
            raise StreamOpenError(specifier, e.strerror or str(e)) from e
        logger.info("Started %r (pid %d)", command, proc.pid)

        def reap():
            proc.stdout.close()
            status = proc.wait()
            if status != 0:
                logger.warning("%r exited with status %d", command, status)

        return LineSource(specifier, proc.stdout, depth, on_close=reap)


class InputController:
    """
    Turns command-line stream specifiers into LineSources.
    """

    def __init__(self, depth: int = DEFAULT_LOOKAHEAD_DEPTH):
        """
        Args:
            depth (int): Lookahead depth given to every source.
        """
        self.depth = depth

    def open(self, specifier: str) -> LineSource:
        opener = self._get_opener(specifier)
        logger.debug("Opening %r with %s", specifier, type(opener).__name__)
        return opener.open(specifier, self.depth)

    def open_pair(self, spec_a: str, spec_b: str):
        """
        Opens both streams; the first is closed again if the second fails.

        Returns:
            Tuple[LineSource, LineSource]: Sources for stream 1 and stream 2.
        """
        source_a = self.open(spec_a)
        try:
            source_b = self.open(spec_b)
        except StreamOpenError:
            source_a.close()
            raise
        return source_a, source_b

    def _get_opener(self, specifier: str) -> StreamOpener:
        if specifier == STDIN_SPECIFIER: return StdinOpener()
        if specifier.rstrip().endswith(COMMAND_SUFFIX): return CommandOpener()
        return FileOpener()
