"""Process-wide logging setup for the command-line entry point.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the application.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

QUIET = -1
DEFAULT = 0
VERBOSE = 1


def level_for(verbosity: int) -> int:
    if verbosity <= QUIET:
        return logging.WARNING
    if verbosity >= VERBOSE:
        return logging.DEBUG
    return logging.INFO


def configure_logging(verbosity: int = DEFAULT, stream=None) -> logging.Logger:
    """Attach a stderr handler to the ``worldviz`` logger and set its level.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.
    """
    root = logging.getLogger("worldviz")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level_for(verbosity))
    root.propagate = False
    return root
