"""Wiring (Arduino) code generation."""

from __future__ import annotations

from statewire.wiring.codegen._constants import (
    _BLINK_HELPER,
    _FAULT_PIN_MACRO,
    BLINK_PAUSE_MS,
    BLINK_PULSE_MS,
)
from statewire.wiring.codegen._util import _indent_body, _pin_mode
from statewire.wiring.codegen.compile import compile_state
from statewire.wiring.codegen.context import CodegenContext


def _render_header(ctx: CodegenContext) -> list[str]:
    lines = [
        f"// File generated by statewire for {ctx.program.name}",
        "long time = 0;",
        f"long debounce = {ctx.debounce_ms};",
        "",
    ]
    if ctx.uses_fault_pin:
        lines.extend([f"#define {_FAULT_PIN_MACRO} {ctx.program.fault_pin}", ""])
    return lines


def _render_resources(ctx: CodegenContext) -> list[str]:
    lines = [
        f"int {ctx.symbol_for_resource(resource.name)} = {resource.port};"
        for resource in ctx.resources
    ]
    if lines:
        lines.append("")
    return lines


def _render_setup(ctx: CodegenContext) -> list[str]:
    body: list[str] = []
    if ctx.program.has_fault_states:
        body.extend(
            [
                f"pinMode({_FAULT_PIN_MACRO}, OUTPUT);",
                f"digitalWrite({_FAULT_PIN_MACRO}, LOW);",
            ]
        )
    body.extend(
        f"pinMode({ctx.symbol_for_resource(resource.name)}, {_pin_mode(resource)});"
        for resource in ctx.resources
    )
    return ["void setup() {", *_indent_body(body, 2), "}", ""]


def _render_state_functions(ctx: CodegenContext) -> list[str]:
    lines: list[str] = []
    for state in ctx.states:
        lines.extend(compile_state(state, ctx))
        lines.append("")
    return lines


def _render_blink_helper() -> list[str]:
    return [
        f"void {_BLINK_HELPER}(int errorCode) {{",
        "  for (int i = 0; i < errorCode; i++) {",
        f"    digitalWrite({_FAULT_PIN_MACRO}, HIGH);",
        f"    delay({BLINK_PULSE_MS});",
        f"    digitalWrite({_FAULT_PIN_MACRO}, LOW);",
        f"    delay({BLINK_PULSE_MS});",
        "  }",
        f"  delay({BLINK_PAUSE_MS});",
        "}",
        "",
    ]


def _render_helper_section(ctx: CodegenContext) -> list[str]:
    lines: list[str] = []
    for helper in ctx.helpers_in_order():
        if helper == _BLINK_HELPER:
            lines.extend(_render_blink_helper())
    return lines


def _render_loop(ctx: CodegenContext) -> list[str]:
    initial = ctx.program.initial
    if initial is None:
        raise RuntimeError("Cannot render loop() without an initial state")
    return ["void loop() {", f"  {ctx.symbol_for_state(initial)}();", "}"]


def _render_code(ctx: CodegenContext) -> str:
    # State functions first: compiling them records which helpers are needed.
    state_lines = _render_state_functions(ctx)

    lines: list[str] = []
    lines.extend(_render_header(ctx))
    lines.extend(_render_resources(ctx))
    lines.extend(_render_setup(ctx))
    lines.extend(state_lines)
    lines.extend(_render_helper_section(ctx))
    lines.extend(_render_loop(ctx))
    return "\n".join(lines) + "\n"
