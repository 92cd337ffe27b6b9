"""Wiring (Arduino) target for statewire.

Turns a validated Program into a single Arduino sketch: one global
timestamp, one function per state, and a ``loop()`` that enters the
initial state once::

    from statewire.wiring import compile_program

    result = compile_program(program)
    if result.ok:
        Path("alarm.ino").write_text(result.source)
    else:
        print(result.diagnostics.format())
"""

from statewire.wiring.codegen import (
    BLINK_PAUSE_MS,
    BLINK_PULSE_MS,
    DEFAULT_DEBOUNCE_MS,
    EmitResult,
    compile_app,
    compile_program,
    generate_wiring,
)

__all__ = [
    "BLINK_PAUSE_MS",
    "BLINK_PULSE_MS",
    "DEFAULT_DEBOUNCE_MS",
    "EmitResult",
    "compile_app",
    "compile_program",
    "generate_wiring",
]
