from __future__ import annotations

import logging
import os
from typing import Any, List, Optional


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def parse_level(s: Optional[str]) -> Optional[int]:
    if not s:
        return None
    v = str(s).strip().upper()
    if not v:
        return None
    return _LEVELS.get(v)


def resolve_level(args: Any = None) -> int:
    """Pick the root log level.

    Priority (highest first):
    - env BEATLANE_LOG_LEVEL
    - CLI flags: --quiet / --basic_debug (if present on args)
    - default: INFO
    """
    quiet = bool(getattr(args, "quiet", False)) if args is not None else False
    basic_debug = bool(getattr(args, "basic_debug", False)) if args is not None else False

    level = logging.INFO
    if quiet:
        level = logging.WARNING
    if basic_debug:
        level = logging.DEBUG

    env_level = parse_level(os.environ.get("BEATLANE_LOG_LEVEL"))
    if env_level is not None:
        level = int(env_level)
    return level


def setup_logging(args: Any = None, *, name: str = "beatlane") -> None:
    """Configure python logging once.

    A ``log_file`` attribute on args adds a file handler next to stderr.
    """

    root = logging.getLogger()
    if root.handlers:
        return

    level = resolve_level(args)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%H:%M:%S"

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    log_file = getattr(args, "log_file", None) if args is not None else None
    if log_file:
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))

    logging.basicConfig(level=level, format=fmt, datefmt=datefmt, handlers=handlers)

    logging.getLogger(name).debug(
        "logging initialized (level=%s, log_file=%s)",
        logging.getLevelName(level),
        log_file,
    )
