# g3device

Support code for an MSM8974-based handset, written as a plain Python
package with no third-party dependencies.

It covers:

- `g3device.linked_list`: a list that adds at the head and removes from the
  tail, with optional per-item release functions and a search.
- `g3device.msg_q`: a blocking, thread-safe first-in, first-out message
  queue that can be unblocked to wake every waiting receiver.
- `g3device.loc_target`: GNSS target values (`target_set`, `gnss_type`) and
  `TargetDetector`, which works out the platform's target from system
  properties and sysfs files under a chosen root directory.
- `g3device.log_util`: `LocLogger`, a debug-level filter on top of the
  standard `logging` module, name tables for queue statuses and targets, and
  time-stamp helpers.
- `g3device.loc_timer`: one-shot timers that call back from a background
  thread unless stopped first.
- `g3device.lights`: the LCD backlight and the shared indicator LED, where
  attention wins over notifications and notifications over battery.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

A message queue hands messages out in the order they were sent:

```python
from g3device.msg_q import MessageQueue, QueueUnblockedError

queue = MessageQueue()
queue.send("first", None)
queue.send("second", None)
assert queue.receive() == "first"

queue.unblock()          # wakes every waiting receiver
assert queue.unblocked
try:
    queue.receive()
except QueueUnblockedError:
    pass
```

The list keeps the same order and can search from the newest item:

```python
from g3device.linked_list import LinkedList

items = LinkedList()
items.add(1, None)
items.add(2, None)
assert items.search(lambda wanted, item: wanted == item, 2, True) == 2
assert items.remove() == 1
assert items.is_empty()
```

Target values pack the GNSS type and the SSC flag together:

```python
from g3device.loc_target import GnssTarget, SscType, target_set, gnss_type
from g3device.log_util import target_name

target = target_set(GnssTarget.MDM, SscType.HAS_SSC)
assert gnss_type(target) == GnssTarget.MDM
assert target_name(target) == " GNSS_MDM with SSC"
```

`TargetDetector` takes the directory the sysfs paths are looked up under and
a function that returns a system property's value, or `None` when it cannot
be read:

```python
from g3device.loc_target import TargetDetector

detector = TargetDetector("/", {"ro.baseband": "apq"}.get)
detector.detect()
```

A timer calls `callback(user_data, errno.ETIMEDOUT)` once after the delay,
unless it is stopped first:

```python
from g3device.loc_timer import timer_start

timer = timer_start(500, lambda user_data, result: print("expired", user_data), "fix")
timer.stop()
timer.join(1.0)
```

Lights write to sysfs files, whose paths can be given:

```python
from g3device.lights import Lights, LightState, FlashMode, rgb_to_brightness

assert rgb_to_brightness(LightState(color=0xFFFFFF)) == 255

lights = Lights("/sys/class/leds/lcd-backlight/brightness",
                "/sys/class/lg_rgb_led/use_patterns/blink_patterns")
set_notifications = lights.open("notifications")
set_notifications(LightState(color=0xFF00FF00, flash_mode=FlashMode.TIMED,
                             flash_on_ms=500, flash_off_ms=2000))
```

## What the package does not do

- It has no command-line tool; everything is used as a library.
- It does not read location-service configuration files; `LocLogger` is
  configured by calling `LocLogger.configure` directly.
- It does not read or provision the Wi-Fi and Bluetooth hardware addresses.