"""Two-state switch built directly through ProgramBuilder, as a parser would."""

from __future__ import annotations

from statewire.core import HIGH, LOW, Program, ProgramBuilder, ResourceKind


def build_switch(*, source_file: str | None = None) -> Program:
    """``led`` follows ``btn``: on while pressed, off while released."""
    builder = ProgramBuilder("Switch", source_file=source_file)

    builder.lineno = 1
    builder.register_resource(2, ResourceKind.SENSOR, "btn")
    builder.lineno = 2
    builder.register_resource(13, ResourceKind.ACTUATOR, "led")

    builder.lineno = 4
    builder.make_state(
        "Off",
        [builder.make_action("led", LOW)],
        [builder.make_transition(builder.make_condition("btn", HIGH), "On")],
        initial=True,
    )
    builder.lineno = 8
    builder.make_state(
        "On",
        [builder.make_action("led", HIGH)],
        [builder.make_transition(builder.make_condition("btn", LOW), "Off")],
    )
    return builder.build()
