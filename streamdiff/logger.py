# streamdiff/logger.py

import logging
import os
import sys

from .config import DEBUG_ENV_VAR

APP_NAME = "streamdiff"


def setup_logger(debug=False):
    logger = logging.getLogger(APP_NAME)

    # Default: silence everything unless --debug or STREAMDIFF_DEBUG=1
    if not (debug or os.environ.get(DEBUG_ENV_VAR)):
        logger.setLevel(logging.CRITICAL)
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    # Debug mode: stdout carries the diff, so diagnostics go to stderr
    logger.setLevel(logging.DEBUG)
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(sh)
    logger.propagate = False
    return logger

logger = setup_logger()
