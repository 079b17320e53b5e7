"""Detection of the GNSS target type of the running platform."""

from __future__ import annotations

import enum
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PropertyGetter = Callable[[str], Optional[str]]
Sleeper = Callable[[float], None]


class GnssTarget(enum.IntEnum):
    """Kind of GNSS hardware the platform carries."""

    NONE = 0
    MSM = 1
    GSS = 2
    MDM = 3
    QCA1530 = 4
    AUTO = 5
    UNKNOWN = 6


class SscType(enum.IntEnum):
    """Whether the platform has a sensor subsystem core."""

    NO_SSC = 0
    HAS_SSC = 1


def target_set(gnss: int, ssc: int) -> int:
    """Combine a GNSS type and an SSC flag into a target value."""
    return (int(gnss) << 1) | int(ssc)


def gnss_type(target: int) -> int:
    """Return the GNSS type part of a target value."""
    return target >> 1


TARGET_DEFAULT = target_set(GnssTarget.MSM, SscType.HAS_SSC)
TARGET_MDM = target_set(GnssTarget.MDM, SscType.HAS_SSC)
TARGET_APQ_SA = target_set(GnssTarget.GSS, SscType.NO_SSC)
TARGET_MPQ = target_set(GnssTarget.NONE, SscType.NO_SSC)
TARGET_MSM_NO_SSC = target_set(GnssTarget.MSM, SscType.NO_SSC)
TARGET_QCA1530 = target_set(GnssTarget.QCA1530, SscType.NO_SSC)
TARGET_AUTO = target_set(GnssTarget.AUTO, SscType.NO_SSC)
TARGET_UNKNOWN = target_set(GnssTarget.UNKNOWN, SscType.NO_SSC)
# Reported when a platform matches a development board but has no modem node.
TARGET_INVALID = 0xFFFFFFFF

_APQ8064_ID_1 = "109"
_APQ8064_ID_2 = "153"
_MPQ8064_ID_1 = "130"
_MSM8930_ID_1 = "142"
_MSM8930_ID_2 = "116"
_APQ8030_ID_1 = "157"
_APQ8074_ID_1 = "184"

LINE_LEN = 100
_STR_LIQUID = "Liquid"
_STR_SURF = "Surf"
_STR_MTP = "MTP"
_STR_APQ = "apq"
_STR_AUTO = "auto"

QCA1530_PROPERTY = "sys.qca1530"
QCA1530_DETECT_TIMEOUT = 15
QCA1530_DETECT_PRESENT = "yes"
QCA1530_DETECT_PROGRESS = "detect"

_HW_PLATFORM = "/sys/devices/soc0/hw_platform"
_SOC_ID = "/sys/devices/soc0/soc_id"
_HW_PLATFORM_DEP = "/sys/devices/system/soc/soc0/hw_platform"
_SOC_ID_DEP = "/sys/devices/system/soc/soc0/id"
_MDM = "/dev/mdm"


def _read_property(get_property: Optional[PropertyGetter], name: str) -> Optional[str]:
    """Look up ``name`` with ``get_property``; without a getter nothing is readable."""
    if get_property is None:
        return None
    return get_property(name)


def _token_matches(line: str, token: str) -> bool:
    """True when ``line`` holds ``token`` followed by nothing or a line end."""
    if not line.startswith(token):
        return False
    rest = line[len(token):len(token) + 1]
    return rest in ("", "\n", "\r", "\0")


def is_qca1530(get_property: Optional[PropertyGetter] = None, sleep: Sleeper = time.sleep) -> bool:
    """Tell whether a QCA1530 SoC is configured, from the ``sys.qca1530`` property.

    "yes" means present; "detect" means detection is running, so wait a second
    and look again, up to 15 times. Any other value, or an unreadable
    property, means absent.
    """
    result = False
    for _ in range(QCA1530_DETECT_TIMEOUT):
        value = _read_property(get_property, QCA1530_PROPERTY)
        if value is None:
            logger.debug("qca1530: property %s is not accessible", QCA1530_PROPERTY)
            break
        logger.debug("qca1530: property %s is set to %s", QCA1530_PROPERTY, value)
        if value == QCA1530_DETECT_PRESENT:
            result = True
            break
        if value == QCA1530_DETECT_PROGRESS:
            logger.debug("qca1530: SoC detection is in progress.")
            sleep(1)
            continue
        break
    logger.debug("qca1530: detected=%s", "true" if result else "false")
    return result


def get_target_baseband(get_property: Optional[PropertyGetter] = None) -> str:
    """Return the ``ro.baseband`` property, or an empty string."""
    baseband = _read_property(get_property, "ro.baseband") or ""
    logger.debug("Baseband: %s", baseband)
    return baseband


def get_platform_name(get_property: Optional[PropertyGetter] = None) -> str:
    """Return the ``ro.board.platform`` property, or an empty string."""
    name = _read_property(get_property, "ro.board.platform") or ""
    logger.debug("Target name: %s", name)
    return name


class TargetDetector:
    """Works out the target value from properties and sysfs files under ``root``.

    A detected target is remembered; later calls to :meth:`detect` return it.
    """

    def __init__(
        self,
        root: str | os.PathLike = "/",
        get_property: Optional[PropertyGetter] = None,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        self._root = Path(root)
        self._get_property = get_property
        self._sleep = sleep or time.sleep
        self._target: Optional[int] = None

    def _path(self, absolute: str) -> Path:
        return self._root / absolute.lstrip("/")

    def _read_a_line(self, absolute: str) -> Optional[str]:
        """Return the first line of a file, or None if it cannot be opened."""
        path = self._path(absolute)
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as stream:
                line = stream.readline(LINE_LEN - 1)
        except OSError as exc:
            logger.error("open failed: %s: %s", path, exc.strerror or exc)
            return None
        logger.debug("cat %s: %s", path, line)
        return line

    def _read_first_existing(self, current: str, deprecated: str) -> str:
        chosen = current if self._path(current).exists() else deprecated
        return self._read_a_line(chosen) or ""

    def detect(self) -> int:
        """Return the target value of the platform."""
        if self._target is not None:
            return self._target
        target = self._detect()
        if target != TARGET_INVALID:
            self._target = target
        logger.debug("HAL: detect returned %d", target)
        return target

    def _detect(self) -> int:
        if is_qca1530(self._get_property, self._sleep):
            return TARGET_QCA1530

        baseband = get_target_baseband(self._get_property)
        hw_platform = self._read_first_existing(_HW_PLATFORM, _HW_PLATFORM_DEP)
        soc_id = self._read_first_existing(_SOC_ID, _SOC_ID_DEP)

        if baseband.startswith(_STR_AUTO):
            return TARGET_AUTO
        if baseband.startswith(_STR_APQ):
            if _token_matches(soc_id, _MPQ8064_ID_1):
                return TARGET_MPQ
            return TARGET_APQ_SA
        if any(_token_matches(hw_platform, board) for board in (_STR_LIQUID, _STR_SURF, _STR_MTP)):
            if self._read_a_line(_MDM) is not None:
                return TARGET_MDM
            return TARGET_INVALID
        if _token_matches(soc_id, _MSM8930_ID_1) or _token_matches(soc_id, _MSM8930_ID_2):
            return TARGET_MSM_NO_SSC
        return TARGET_UNKNOWN