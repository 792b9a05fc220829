"""
streamdiff Package
==================

This package diffs two ordered line streams (files, standard input or the
output of running commands) without reading either one in full. Each
stream is seen through a bounded lookahead window; after a mismatch a
resync strategy decides how many lines to drop from each side so both line
up again, and the differences are printed in unified-diff style as they
are found.

Modules:
    - engine: Main loop (StreamDiffEngine).
    - input_controller: Opens streams and buffers lookahead (LineSource).
    - resync: Naive and LCS-aligned resync strategies.
    - emitter: Context bookkeeping and output (DiffEmitter).
    - models: Data structures (DiffRegion, AlignmentTally, DiffSummary).
    - utils: LCS alignment traversal (SequenceAligner).
    - config: Defaults and exit codes.
    - logger: Application logger.
"""
