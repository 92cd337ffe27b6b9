"""Tests for source-file/line metadata capture on DSL elements."""

from __future__ import annotations

import inspect
from pathlib import Path
from types import FrameType
from typing import cast

from statewire.core import (
    MISSING_INITIAL_STATE,
    UNDECLARED_RESOURCE,
    App,
    actuator,
    after,
    fault_state,
    sensor,
    state,
    write,
)


def _line_no() -> int:
    frame = cast(FrameType, inspect.currentframe())
    caller = cast(FrameType, frame.f_back)
    return caller.f_lineno


def test_dsl_calls_capture_user_file_and_line():
    app_line = _line_no() + 1
    with App("Located", fault_pin=12) as app:
        sensor_line = _line_no() + 1
        sensor("btn", 2)
        actuator_line = _line_no() + 1
        led = actuator("led", 13)
        state_line = _line_no() + 1
        with state("idle", initial=True):
            write_line = _line_no() + 1
            write(led, 1)
            after_line = _line_no() + 1
            after(100, goto="idle")
        fault_line = _line_no() + 1
        fault_state("broken", blinks=2)

    program = app.program
    assert program.source_file is not None
    assert Path(program.source_file).name == Path(__file__).name

    btn, led_res = program.registry
    assert btn.line == sensor_line
    assert led_res.line == actuator_line
    assert Path(btn.source_file or "").name == Path(__file__).name

    idle, broken = program.states
    assert idle.line == state_line
    assert idle.actions[0].line == write_line
    assert idle.transitions[0].line == after_line
    assert broken.line == fault_line
    assert program.end_line is not None
    assert program.end_line >= app_line


def test_diagnostics_point_at_user_lines():
    with App("Located") as app:
        with state("idle"):
            bad_line = _line_no() + 1
            write("ghost", 1)

    report = app.validate()
    assert report.codes() == [UNDECLARED_RESOURCE, MISSING_INITIAL_STATE]
    undeclared = report.errors[0]
    assert undeclared.line == bad_line
    assert undeclared.format().startswith(f"{__file__}:{bad_line}: ")
