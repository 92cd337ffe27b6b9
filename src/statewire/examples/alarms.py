"""Alarm applications written with the embedded DSL."""

from __future__ import annotations

from statewire.core import HIGH, LOW, App, actuator, after, fault_state, sensor, state, when, write


def very_simple_alarm() -> App:
    """Pressing the button turns on both the LED and the buzzer."""
    with App("VerySimpleAlarm") as app:
        button = sensor("button", 9)
        led = actuator("led", 10)
        buzzer = actuator("buzzer", 11)

        with state("idle", initial=True):
            write(led, LOW)
            write(buzzer, LOW)
            when(button.is_high(), goto="alarming")

        with state("alarming"):
            write(led, HIGH)
            write(buzzer, HIGH)
            when(button.is_low(), goto="idle")
    return app


def dual_check_alarm() -> App:
    """The buzzer sounds only while both buttons are pressed."""
    with App("DualCheckAlarm") as app:
        b1 = sensor("b1", 8)
        b2 = sensor("b2", 9)
        buzzer = actuator("buzzer", 11)

        with state("idle", initial=True):
            write(buzzer, LOW)
            when(b1.is_high() & b2.is_high(), goto="on")

        with state("on"):
            write(buzzer, HIGH)
            when(b1.is_low() | b2.is_low(), goto="idle")
    return app


def multi_state_alarm() -> App:
    """Each press cycles ready -> buzzing -> lighting -> ready."""
    with App("MultiStateAlarm") as app:
        button = sensor("button", 9)
        led = actuator("led", 12)
        buzzer = actuator("buzzer", 11)

        with state("ready", initial=True):
            write(led, LOW)
            write(buzzer, LOW)
            when(button.is_high(), goto="buzzing")

        with state("buzzing"):
            write(led, LOW)
            write(buzzer, HIGH)
            when(button.is_high(), goto="lighting")

        with state("lighting"):
            write(led, HIGH)
            write(buzzer, LOW)
            when(button.is_high(), goto="ready")
    return app


def timed_alarm(duration_ms: int = 5000) -> App:
    """The LED stays on for ``duration_ms`` after a press, unless pressed again."""
    with App("TimedAlarm") as app:
        button = sensor("button", 9)
        led = actuator("led", 12)

        with state("off", initial=True):
            write(led, LOW)
            when(button.is_high(), goto="on")

        with state("on"):
            write(led, HIGH)
            when(button.is_high(), goto="off")
            after(duration_ms, goto="off")
    return app


def alarm_with_error(fault_pin: int = 11, blinks: int = 4) -> App:
    """The panic button latches a fault that blinks ``blinks`` times forever."""
    with App("AlarmWithError", fault_pin=fault_pin) as app:
        button = sensor("button", 9)
        panic = sensor("panic", 8)
        led = actuator("led", 12)

        with state("off", initial=True):
            write(led, LOW)
            when(panic.is_high(), goto="errButtons")
            when(button.is_high(), goto="on")

        with state("on"):
            write(led, HIGH)
            when(panic.is_high(), goto="errButtons")
            when(button.is_low(), goto="off")

        fault_state("errButtons", blinks=blinks)
    return app
