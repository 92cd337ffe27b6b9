"""Ready-made example applications."""

from statewire.examples.alarms import (
    alarm_with_error,
    dual_check_alarm,
    multi_state_alarm,
    timed_alarm,
    very_simple_alarm,
)
from statewire.examples.switch import build_switch

__all__ = [
    "alarm_with_error",
    "build_switch",
    "dual_check_alarm",
    "multi_state_alarm",
    "timed_alarm",
    "very_simple_alarm",
]
