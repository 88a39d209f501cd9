"""
Logging configuration: called once by the CLI before anything else runs.

Modules log through ``logging.getLogger(__name__)``; user-facing text goes
through click instead, so at the default WARNING level the terminal only
shows the scaffolder's own messages.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  CHICO_LOG_LEVEL  >  WARNING

A second, always-detailed handler is added when CHICO_LOG_FILE is set
(its level comes from CHICO_LOG_FILE_LEVEL, else the console level).
"""

from __future__ import annotations

import logging
import os
import sys

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s"

# console level → (format, datefmt); the first entry whose threshold is
# >= the requested level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def level_from_flags(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get("CHICO_LOG_LEVEL", "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console (and optional file) handler on the root logger.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the file handler (default: ``level``).
    """
    console_level = _parse_level(level)
    fmt, datefmt = next(
        ((f, d) for threshold, f, d in _CONSOLE_FORMATS if console_level <= threshold),
        _CONSOLE_FORMATS[-1][1:],
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level or level)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
