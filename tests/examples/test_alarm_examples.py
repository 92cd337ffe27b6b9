"""Tests for the alarm example applications."""

from __future__ import annotations

import pytest

from statewire.examples import (
    alarm_with_error,
    dual_check_alarm,
    multi_state_alarm,
    timed_alarm,
    very_simple_alarm,
)
from statewire.wiring import compile_program
from tests.conftest import generate_source


@pytest.mark.parametrize(
    "factory",
    [very_simple_alarm, dual_check_alarm, multi_state_alarm, timed_alarm, alarm_with_error],
)
def test_examples_validate_cleanly(factory):
    report = factory().validate()
    assert report.errors == ()
    assert report.warnings == ()


def test_very_simple_alarm_drives_both_outputs():
    source = generate_source(very_simple_alarm().program)
    assert "void state_alarming() {\n  digitalWrite(led, HIGH);\n  digitalWrite(buzzer, HIGH);\n" in source
    assert "void loop() {\n  state_idle();\n}\n" in source


def test_dual_check_alarm_renders_compound_guards():
    source = generate_source(dual_check_alarm().program)
    assert "  if ((digitalRead(b1) == HIGH && digitalRead(b2) == HIGH) && guard) {" in source
    assert "  if ((digitalRead(b1) == LOW || digitalRead(b2) == LOW) && guard) {" in source


def test_multi_state_alarm_cycles_through_states():
    source = generate_source(multi_state_alarm().program)
    for current, following in [("ready", "buzzing"), ("buzzing", "lighting"), ("lighting", "ready")]:
        body = source.split(f"void state_{current}() {{", 1)[1].split("\n}\n", 1)[0]
        assert f"    state_{following}();" in body
        assert f"    state_{current}();" in body


def test_timed_alarm_mixes_press_and_timeout():
    source = generate_source(timed_alarm(duration_ms=750).program)
    on_body = source.split("void state_on() {", 1)[1].split("\n}\n", 1)[0]
    assert on_body.index("digitalRead(button) == HIGH && guard") < on_body.index(
        "} else if (millis() - time > 750) {"
    )


def test_alarm_with_error_blinks_configured_count():
    result = compile_program(alarm_with_error(fault_pin=7, blinks=5).program)
    assert result.ok
    assert result.source is not None
    assert "#define ERROR_LED_PIN 7" in result.source
    assert "  blinkError(5);\n  state_errButtons();\n" in result.source
    assert result.source.count("void blinkError(int errorCode)") == 1


def test_alarm_with_error_rejects_fault_pin_on_used_port():
    result = compile_program(alarm_with_error(fault_pin=9).program)
    assert not result.ok
    assert [e.message for e in result.errors] == ["port 9 was already used by 'button'"]
