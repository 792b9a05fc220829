# streamdiff/config.py

# Context lines printed before and after each diff region
DEFAULT_CONTEXT_LINES = 3

# Lines buffered per stream; resync never looks further ahead than this
DEFAULT_LOOKAHEAD_DEPTH = 200
# Naive resync needs a line plus its confirmation line
MIN_LOOKAHEAD_DEPTH = 2

# Resync strategy names accepted by make_strategy()
STRATEGY_NAIVE = "naive"
STRATEGY_LCS = "lcs"

# Stream specifiers
STDIN_SPECIFIER = "-"
COMMAND_SUFFIX = "|"

# Exit status
EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2
EXIT_LOST_SYNC = 3

# Set to 1 to get diagnostic logging on stderr
DEBUG_ENV_VAR = "STREAMDIFF_DEBUG"
