"""Logging utilities for DepDelta.

Component loggers write to stderr through rich so that JSON printed on
stdout by the CLI stays machine readable.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Set

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOG_THEME = Theme({
    "logging.level.debug": "dim",
    "logging.level.info": "cyan",
    "logging.level.warning": "yellow",
    "logging.level.error": "red",
})

_level = logging.INFO
_component_names: Set[str] = set()


def _rich_handler() -> RichHandler:
    # Logged diff text may contain square brackets
    handler = RichHandler(
        console=Console(stderr=True, theme=LOG_THEME),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    return handler


class DepDeltaLogger:
    """Per-component logger with a single rich stderr handler."""

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers = [_rich_handler()]
        self.logger.propagate = False

    def _log(self, level: int, msg: str, fields: dict) -> None:
        self.logger.log(level, msg, extra=fields or None)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, fields)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Set the level for every DepDelta component logger.

    Args:
        level: Logging level
        log_file: Optional file that also receives root-level records
        verbose: Shortcut for DEBUG
    """
    global _level
    _level = logging.DEBUG if verbose else level

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )

    # Loggers created before this call keep their old level otherwise
    for name in _component_names:
        logging.getLogger(name).setLevel(_level)


def get_logger(name: str) -> DepDeltaLogger:
    """Return the logger for a DepDelta component at the current level."""
    _component_names.add(name)
    return DepDeltaLogger(name, _level)
