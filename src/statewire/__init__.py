"""statewire: compile declarative hardware state machines to Arduino sketches."""

from statewire.core import (
    HIGH,
    LOW,
    App,
    Program,
    ProgramBuilder,
    actuator,
    after,
    fault_state,
    sensor,
    state,
    validate_program,
    when,
    write,
)
from statewire.wiring import EmitResult, compile_app, compile_program, generate_wiring

__all__ = [
    "HIGH",
    "LOW",
    "App",
    "EmitResult",
    "Program",
    "ProgramBuilder",
    "actuator",
    "after",
    "compile_app",
    "compile_program",
    "fault_state",
    "generate_wiring",
    "sensor",
    "state",
    "validate_program",
    "when",
    "write",
]
