"""Device support utilities: location-service helpers, target detection, timers and LED control."""

__version__ = "0.1.0"

__all__ = [
    "lights",
    "linked_list",
    "loc_target",
    "loc_timer",
    "log_util",
    "msg_q",
]