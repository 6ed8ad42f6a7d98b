from __future__ import annotations

import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep todo_cli logs, but only let third-party loggers (httpx,
    httpcore, keyring) through at WARNING+ unless verbose.
    """

    def __init__(self, verbose: bool):
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("todo_cli"):
            return True
        if self.verbose:
            return record.levelno >= logging.INFO
        return record.levelno >= logging.WARNING


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging to stderr.

    Without --verbose only warnings and errors are shown; with it, debug
    output from todo_cli and request lines from httpx.

    Call this ONCE, before the first request.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter(verbose))
    root.addHandler(ch)

    logging.captureWarnings(True)
