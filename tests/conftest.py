"""Pytest configuration and test helpers."""

import pytest

from statewire.core import HIGH, LOW, Program, ProgramBuilder, ResourceKind
from statewire.core import dsl as _dsl
from statewire.wiring import compile_program


@pytest.fixture(autouse=True)
def _reset_dsl_stacks():
    """Leave no App/state context behind when a test fails inside a with-block."""
    yield
    _dsl._app_stack.clear()
    _dsl._state_stack.clear()


def switch_builder(name: str = "Switch") -> ProgramBuilder:
    """Builder for the two-state btn/led switch.

    ``Off`` (initial) writes led LOW and goes to ``On`` when btn reads HIGH;
    ``On`` writes led HIGH and goes back to ``Off`` when btn reads LOW.
    """
    builder = ProgramBuilder(name)
    builder.register_resource(2, ResourceKind.SENSOR, "btn", line=1)
    builder.register_resource(13, ResourceKind.ACTUATOR, "led", line=2)
    builder.make_state(
        "Off",
        [builder.make_action("led", LOW, line=4)],
        [builder.make_transition(builder.make_condition("btn", HIGH), "On", line=5)],
        initial=True,
        line=3,
    )
    builder.make_state(
        "On",
        [builder.make_action("led", HIGH, line=7)],
        [builder.make_transition(builder.make_condition("btn", LOW), "Off", line=8)],
        line=6,
    )
    return builder


def generate_source(program: Program, **options) -> str:
    """Compile ``program`` and return its source, failing the test on any error."""
    result = compile_program(program, **options)
    assert result.ok, result.diagnostics.format()
    assert result.source is not None
    return result.source
