"""Logging support for the location utilities: level filter, name tables, time stamps."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from typing import Optional

from g3device.loc_target import GnssTarget, SscType, gnss_type
from g3device.msg_q import MsgQStatus

logger = logging.getLogger(__name__)

UNKNOWN_STR = "UNKNOWN"

BOOL_STR = ("False", "True")
VOID_RET = "None"
FROM_AFW = "===>"
TO_MODEM = "--->"
FROM_MODEM = "<---"
TO_AFW = "<==="
EXIT_TAG = "Exiting"
ENTRY_TAG = "Entering"

# Message levels understood by LocLogger, most severe first.
LOG_E = 1
LOG_W = 2
LOG_I = 3
LOG_D = 4
LOG_V = 5

# Level used when no configuration file set one: defer to the host's logging levels.
DEFAULT_DEBUG_LEVEL = 0xFF

_PREFIXES = {LOG_E: "E/", LOG_W: "W/", LOG_I: "I/", LOG_D: "D/", LOG_V: "V/"}
_HOST_LEVELS = {
    LOG_E: logging.ERROR,
    LOG_W: logging.WARNING,
    LOG_I: logging.INFO,
    LOG_D: logging.DEBUG,
    LOG_V: logging.DEBUG,
}

NameTable = Sequence[tuple[str, int]]

_MSG_Q_STATUS_TABLE: NameTable = tuple(
    (f"eMSG_Q_{status.name}", int(status)) for status in MsgQStatus
)
_TARGET_NAME_TABLE: NameTable = tuple(
    (f"GNSS_{gnss.name}", int(gnss)) for gnss in GnssTarget
)


class LocLogger:
    """Decides which messages are logged from a debug level of 1 to 5.

    A level of 0xff means no level was configured; every message is then
    passed on at its own logging level. With a configured level, messages at
    or below it are logged as errors so that they always show.
    """

    def __init__(self, debug_level: int = DEFAULT_DEBUG_LEVEL, timestamp: int = 0) -> None:
        self.debug_level = debug_level
        self.timestamp = timestamp

    def configure(self, debug_level: int, timestamp: int, user_build: bool = False) -> None:
        """Set the debug level and time stamp flag; user builds are held to level 2."""
        if user_build and debug_level > 2:
            debug_level = 2
        self.debug_level = debug_level
        self.timestamp = timestamp

    def _in_range(self, level: int) -> bool:
        return level <= self.debug_level <= LOG_V

    def enabled(self, level: int) -> bool:
        """Tell whether a message at ``level`` would be logged."""
        if level not in _PREFIXES:
            raise ValueError(f"log level must be between {LOG_E} and {LOG_V}")
        return self._in_range(level) or self.debug_level == DEFAULT_DEBUG_LEVEL

    def log(self, level: int, message: str) -> bool:
        """Log ``message`` at ``level``; return whether it was logged."""
        if not self.enabled(level):
            return False
        text = _PREFIXES[level] + message
        if self.timestamp:
            text = f"[{get_timestamp()}] {text}"
        if self._in_range(level):
            logger.error(text)
        else:
            logger.log(_HOST_LEVELS[level], text)
        return True


loc_logger = LocLogger()


def name_from_mask(table: Iterable[tuple[str, int]], mask: int) -> str:
    """Return the first name whose value shares a bit with ``mask``."""
    for name, value in table:
        if value & mask:
            return name
    return UNKNOWN_STR


def name_from_val(table: Iterable[tuple[str, int]], value: int) -> str:
    """Return the first name whose value equals ``value``."""
    for name, entry in table:
        if entry == value:
            return name
    return UNKNOWN_STR


def msg_q_status_name(status: int) -> str:
    """Return the name of a message queue status code."""
    return name_from_val(_MSG_Q_STATUS_TABLE, int(status))


def succ_fail_string(is_succ: bool) -> str:
    """Return "successful" or "failed"."""
    return "successful" if is_succ else "failed"


def target_name(target: int) -> str:
    """Describe a target value, naming its GNSS type and whether it has an SSC."""
    index = gnss_type(target)
    if index < 0 or index >= len(_TARGET_NAME_TABLE):
        index = len(_TARGET_NAME_TABLE) - 1
    name = name_from_val(_TARGET_NAME_TABLE, index)
    if target & SscType.HAS_SSC == SscType.HAS_SSC:
        return f" {name} with SSC"
    return f" {name}  without SSC"


def _split_seconds(now: Optional[float]) -> tuple[int, int]:
    if now is None:
        micros = time.time_ns() // 1000
    else:
        micros = round(now * 1_000_000)
    return divmod(micros, 1_000_000)


def get_time(now: Optional[float] = None) -> str:
    """Return local time as HH:MM:SS.mmm; ``now`` is seconds since the epoch."""
    seconds, micros = _split_seconds(now)
    hms = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"{hms}.{micros // 1000:03d}"


def get_timestamp(now: Optional[float] = None) -> str:
    """Return UTC time of day as HH:MM:SS.uuuuuu; ``now`` is seconds since the epoch."""
    seconds, micros = _split_seconds(now)
    hours = seconds // 3600 % 24
    minutes = seconds % 3600 // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{micros:06d}"