"""Wiring (Arduino) code generation."""

from __future__ import annotations

from statewire.wiring.codegen._constants import (
    BLINK_PAUSE_MS,
    BLINK_PULSE_MS,
    DEFAULT_DEBOUNCE_MS,
)
from statewire.wiring.codegen.compile import (
    compile_action,
    compile_expression,
    compile_state,
    compile_transitions,
)
from statewire.wiring.codegen.context import CodegenContext
from statewire.wiring.codegen.generate import (
    EmitResult,
    compile_app,
    compile_program,
    generate_wiring,
)

__all__ = [
    "BLINK_PAUSE_MS",
    "BLINK_PULSE_MS",
    "DEFAULT_DEBOUNCE_MS",
    "CodegenContext",
    "EmitResult",
    "compile_action",
    "compile_app",
    "compile_expression",
    "compile_program",
    "compile_state",
    "compile_transitions",
    "generate_wiring",
]
