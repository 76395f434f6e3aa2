"""
Thin logging layer over the standard :mod:`logging` module.

Every QSR component talks to a :class:`Logger` through ``say``/``info``/``warning``
with an indentation level ``lvl`` and an optional ANSI ``color``. The logger is
injected through constructors; when nothing is injected the process-wide
instance from :func:`get_global_logger` is used.

----------------------------------------------------------
File        : QSR/common/flog.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-01
----------------------------------------------------------
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, Union

# ----------------------------------------------------------------

class Logger:
    """
    Indenting, optionally colored wrapper around a :class:`logging.Logger`.

    Parameters
    ----------
    name : str
        Name of the underlying standard library logger.
    level : int | str
        Minimal level that is emitted.
    use_colors : bool
        Whether :meth:`colorize` wraps messages in ANSI escape codes.
    stream :
        Stream for the console handler (``sys.stderr`` by default).
    """

    LEVELS = {
        logging.DEBUG   : "debug",
        logging.INFO    : "info",
        logging.WARNING : "warning",
        logging.ERROR   : "error",
    }
    LEVELS_R = {v: k for k, v in LEVELS.items()}

    COLORS = {
        "white"     : "\033[97m",
        "red"       : "\033[31m",
        "green"     : "\033[32m",
        "yellow"    : "\033[33m",
        "blue"      : "\033[34m",
        "magenta"   : "\033[35m",
        "cyan"      : "\033[36m",
    }
    _RESET      = "\033[0m"
    _INDENT     = "\t"

    def __init__(self,
                name        : str               = "QSR",
                level       : Union[int, str]   = logging.INFO,
                use_colors  : bool              = False,
                stream                          = None):
        if isinstance(level, str):
            level = self.LEVELS_R.get(level.lower(), logging.INFO)
        self.name           = name
        self.use_colors     = use_colors
        self._logger        = logging.getLogger(name)
        self._logger.setLevel(level)
        if not self._logger.handlers:
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
            handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S"))
            self._logger.addHandler(handler)
        self._logger.propagate = False

    # ----------------------------------------------------------------

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: Union[int, str]) -> None:
        if isinstance(level, str):
            level = self.LEVELS_R.get(level.lower(), logging.INFO)
        self._logger.setLevel(level)

    def colorize(self, msg: str, color: Optional[str] = None) -> str:
        """Wrap the message in ANSI codes if colors are enabled and the color is known."""
        if not self.use_colors or color is None or color not in self.COLORS:
            return msg
        return f"{self.COLORS[color]}{msg}{self._RESET}"

    def say(self, msg: str, log: Union[int, str] = logging.INFO, lvl: int = 0) -> None:
        """Emit ``msg`` at level ``log`` indented by ``lvl`` tabs."""
        if isinstance(log, str):
            log = self.LEVELS_R.get(log.lower(), logging.INFO)
        if lvl > 0:
            msg = self._INDENT * lvl + "->" + msg
        self._logger.log(log, msg)

    # ----------------------------------------------------------------

    def debug(self, msg: str, lvl: int = 0, color: Optional[str] = None) -> None:
        self.say(self.colorize(msg, color), log=logging.DEBUG, lvl=lvl)

    def info(self, msg: str, lvl: int = 0, color: Optional[str] = None) -> None:
        self.say(self.colorize(msg, color), log=logging.INFO, lvl=lvl)

    def warning(self, msg: str, lvl: int = 0, color: Optional[str] = "yellow") -> None:
        self.say(self.colorize(msg, color), log=logging.WARNING, lvl=lvl)

    def error(self, msg: str, lvl: int = 0, color: Optional[str] = "red") -> None:
        self.say(self.colorize(msg, color), log=logging.ERROR, lvl=lvl)

    def __repr__(self) -> str:
        return f"Logger(name={self.name}, level={logging.getLevelName(self.level)})"

# ----------------------------------------------------------------

_GLOBAL_LOGGER: Optional[Logger]    = None
_GLOBAL_LOCK                        = threading.Lock()

def get_global_logger(**kwargs) -> Logger:
    """
    Return the process-wide :class:`Logger`, creating it on first use.

    Keyword arguments are forwarded to the constructor only on that first call.
    """
    global _GLOBAL_LOGGER
    if _GLOBAL_LOGGER is not None:
        return _GLOBAL_LOGGER
    with _GLOBAL_LOCK:
        if _GLOBAL_LOGGER is None:
            _GLOBAL_LOGGER = Logger(**kwargs)
    return _GLOBAL_LOGGER

__all__ = ["Logger", "get_global_logger"]

# ----------------------------------------------------------------
#! End of QSR logging
