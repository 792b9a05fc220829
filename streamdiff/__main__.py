"""
streamdiff Entry Point
======================

This module serves as the command-line interface for streamdiff.
It opens both streams, builds the resync strategy and emitter from the
configuration, runs the engine and maps the outcome to an exit status.

Usage:
    python -m streamdiff [-c N] [-l N] [-x] <stream_1> <stream_2>

A stream is a file path, '-' for standard input, or a command ending in
'|' whose output is read, e.g. "./sim --trace |".
"""
import argparse
import io
import os
import sys

from . import config
from .emitter import DiffEmitter
from .engine import StreamDiffEngine
from .input_controller import InputController, StreamOpenError
from .logger import setup_logger
from .resync import LostSyncError, make_strategy

# Default Configuration
DEFAULT_CONFIG = {
    "CONTEXT_LINES": config.DEFAULT_CONTEXT_LINES,
    "LOOKAHEAD_DEPTH": config.DEFAULT_LOOKAHEAD_DEPTH,
    "STRATEGY": config.STRATEGY_NAIVE,
}


def _non_negative(value):
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return n


def _lookahead(value):
    n = int(value)
    if n < config.MIN_LOOKAHEAD_DEPTH:
        raise argparse.ArgumentTypeError(
            f"must be at least {config.MIN_LOOKAHEAD_DEPTH}: {value}")
    return n


def build_parser():
    parser = argparse.ArgumentParser(
        prog="streamdiff",
        description="streamdiff: unified diff of two line streams with bounded lookahead",
    )
    parser.add_argument("stream_1", help="First stream: file, '-' or 'command |'")
    parser.add_argument("stream_2", help="Second stream: file, '-' or 'command |'")
    parser.add_argument("-c", "--context", type=_non_negative, metavar="N",
                        default=DEFAULT_CONFIG["CONTEXT_LINES"],
                        help="Context lines around each region (default: %(default)s)")
    parser.add_argument("-l", "--lookahead", type=_lookahead, metavar="N",
                        default=DEFAULT_CONFIG["LOOKAHEAD_DEPTH"],
                        help="Lines buffered per stream for resync (default: %(default)s)")
    parser.add_argument("-x", "--lcs", action="store_true",
                        help="Resync with LCS alignment instead of the naive search")
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr")
    return parser


def _byte_transparent_stdio():
    # Undecodable bytes survive as surrogates, so distinct lines stay distinct
    for stream in (sys.stdin, sys.stdout):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(encoding='utf-8', errors='surrogateescape')


def _silence_stdout():
    # The reader has gone; the interpreter must not flush into the dead pipe at exit
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(argv=None):
    """
    Main execution function.

    1. Parses command line arguments.
    2. Opens both streams.
    3. Builds the strategy, emitter and engine.
    4. Runs the diff, printing to stdout.
    5. Returns the exit status.
    """
    args = build_parser().parse_args(argv)
    log = setup_logger(args.debug)
    _byte_transparent_stdio()

    run_config = dict(DEFAULT_CONFIG)
    run_config["CONTEXT_LINES"] = args.context
    run_config["LOOKAHEAD_DEPTH"] = args.lookahead
    if args.lcs:
        run_config["STRATEGY"] = config.STRATEGY_LCS
    log.info("Config: %s", run_config)

    # 1. Open Streams
    controller = InputController(run_config["LOOKAHEAD_DEPTH"])
    try:
        source_a, source_b = controller.open_pair(args.stream_1, args.stream_2)
    except StreamOpenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return config.EXIT_TROUBLE

    # 2. Run Diff
    try:
        emitter = DiffEmitter(source_a, source_b, run_config["CONTEXT_LINES"])
        engine = StreamDiffEngine(source_a, source_b,
                                  make_strategy(run_config["STRATEGY"]), emitter)
        summary = engine.run()
    except LostSyncError as e:
        print(f"Error: {e}; increase the lookahead with -l", file=sys.stderr)
        return config.EXIT_LOST_SYNC
    except BrokenPipeError:
        log.info("Output closed early, stopping")
        _silence_stdout()
        return config.EXIT_TROUBLE
    finally:
        source_a.close()
        source_b.close()

    return config.EXIT_IDENTICAL if summary.identical else config.EXIT_DIFFERENT


if __name__ == "__main__":
    sys.exit(main())
