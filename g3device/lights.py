"""Control of the LCD backlight and the RGB indicator LED through sysfs files."""

from __future__ import annotations

import dataclasses
import enum
import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LCD_FILE = "/sys/class/leds/lcd-backlight/brightness"
PTN_BLINK_FILE = "/sys/class/lg_rgb_led/use_patterns/blink_patterns"

LIGHT_ID_BACKLIGHT = "backlight"
LIGHT_ID_NOTIFICATIONS = "notifications"
LIGHT_ID_BATTERY = "battery"
LIGHT_ID_ATTENTION = "attention"


class FlashMode(enum.IntEnum):
    """How a light flashes."""

    NONE = 0
    TIMED = 1
    HARDWARE = 2


@dataclass(frozen=True)
class LightState:
    """Requested state of a light; ``color`` is 0xAARRGGBB."""

    color: int = 0
    flash_mode: FlashMode = FlashMode.NONE
    flash_on_ms: int = 0
    flash_off_ms: int = 0


def is_lit(state: LightState) -> bool:
    """Tell whether the state's RGB part is not black."""
    return bool(state.color & 0x00FFFFFF)


def rgb_to_brightness(state: LightState) -> int:
    """Return the perceived brightness (0 to 255) of the state's colour."""
    color = state.color & 0x00FFFFFF
    red = (color >> 16) & 0xFF
    green = (color >> 8) & 0xFF
    blue = color & 0xFF
    return (77 * red + 150 * green + 29 * blue) >> 8


def _write_line(path: str | os.PathLike, text: str) -> None:
    # The file must already exist, as with a sysfs node.
    with open(path, "r+", encoding="ascii") as stream:
        stream.write(f"{text}\n")


class Lights:
    """The lights of the device.

    Notification, battery and attention share one LED; attention wins over
    notification, which wins over battery.
    """

    def __init__(
        self,
        lcd_file: str | os.PathLike = LCD_FILE,
        blink_file: str | os.PathLike = PTN_BLINK_FILE,
    ) -> None:
        self._lcd_file = lcd_file
        self._blink_file = blink_file
        self._lock = threading.Lock()
        self._notification = LightState()
        self._battery = LightState()
        self._attention = LightState()
        self._warned: set[str] = set()

    def _warn_once(self, what: str, path, exc: OSError) -> None:
        if what not in self._warned:
            logger.error("%s failed to open %s: %s", what, path, exc)
            self._warned.add(what)

    def set_backlight(self, state: LightState) -> None:
        """Set the LCD brightness from the state's colour; raises OSError on failure."""
        brightness = rgb_to_brightness(state)
        with self._lock:
            try:
                _write_line(self._lcd_file, str(brightness))
            except OSError as exc:
                self._warn_once("write_int", self._lcd_file, exc)
                raise

    def _set_speaker_light_locked(self, state: LightState) -> None:
        if state.flash_mode == FlashMode.TIMED:
            on_ms, off_ms = state.flash_on_ms, state.flash_off_ms
        else:
            on_ms, off_ms = -1, -1
        pattern = f"0x{state.color & 0xFFFFFFFF:x},{on_ms},{off_ms}"
        try:
            _write_line(self._blink_file, pattern)
        except OSError as exc:
            self._warn_once("write_str", self._blink_file, exc)

    def _handle_led_prioritized_locked(self) -> None:
        if is_lit(self._attention):
            self._set_speaker_light_locked(self._attention)
        elif is_lit(self._notification):
            self._set_speaker_light_locked(self._notification)
        elif is_lit(self._battery):
            self._set_speaker_light_locked(self._battery)
        else:
            self._set_speaker_light_locked(self._notification)

    def set_battery(self, state: LightState) -> None:
        """Set the battery indication."""
        with self._lock:
            self._battery = state
            self._handle_led_prioritized_locked()

    def set_notifications(self, state: LightState) -> None:
        """Set the notification indication."""
        with self._lock:
            self._notification = state
            self._handle_led_prioritized_locked()

    def set_attention(self, state: LightState) -> None:
        """Set the attention indication; zero on and off times turn it off."""
        with self._lock:
            if state.flash_on_ms == 0 and state.flash_off_ms == 0:
                state = dataclasses.replace(state, color=0)
            self._attention = state
            self._handle_led_prioritized_locked()

    def open(self, name: str) -> Callable[[LightState], None]:
        """Return the setter for the light called ``name``."""
        setters = {
            LIGHT_ID_BACKLIGHT: self.set_backlight,
            LIGHT_ID_NOTIFICATIONS: self.set_notifications,
            LIGHT_ID_BATTERY: self.set_battery,
            LIGHT_ID_ATTENTION: self.set_attention,
        }
        try:
            return setters[name]
        except KeyError:
            raise ValueError(f"unknown light: {name!r}") from None