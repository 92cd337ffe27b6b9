"""Wiring (Arduino) code generation."""

from __future__ import annotations

from statewire.core.expression import AndExpr, Condition, Expression, OrExpr
from statewire.core.graph import Action, OnDelay, OnExpression, State, Transition
from statewire.wiring.codegen._constants import _BLINK_HELPER
from statewire.wiring.codegen._util import _indent_body, _level_literal
from statewire.wiring.codegen.context import CodegenContext


def compile_expression(expr: Expression, ctx: CodegenContext) -> str:
    """Return a C boolean expression string with explicit parentheses."""
    if isinstance(expr, Condition):
        return f"digitalRead({ctx.symbol_for_resource(expr.sensor)}) == {_level_literal(expr.level)}"
    if isinstance(expr, AndExpr):
        return f"({compile_expression(expr.left, ctx)} && {compile_expression(expr.right, ctx)})"
    if isinstance(expr, OrExpr):
        return f"({compile_expression(expr.left, ctx)} || {compile_expression(expr.right, ctx)})"

    raise NotImplementedError(f"Unsupported expression type: {type(expr).__name__}")


def compile_action(action: Action, ctx: CodegenContext) -> str:
    return f"digitalWrite({ctx.symbol_for_resource(action.target)}, {_level_literal(action.level)});"


def _compile_branch_condition(transition: Transition, ctx: CodegenContext) -> str:
    if isinstance(transition, OnExpression):
        return f"{compile_expression(transition.guard, ctx)} && guard"
    if isinstance(transition, OnDelay):
        return f"millis() - time > {transition.milliseconds}"

    raise NotImplementedError(f"Unsupported transition type: {type(transition).__name__}")


def compile_transitions(state: State, ctx: CodegenContext) -> list[str]:
    """Render the dispatch chain of ``state`` at function-body depth (no indent).

    Branches keep declaration order, so the first satisfied guard wins.
    """
    self_call = f"{ctx.symbol_for_state(state.name)}();"
    if not state.transitions:
        return [self_call]

    lines: list[str] = []
    if any(isinstance(t, OnExpression) for t in state.transitions):
        lines.append("boolean guard = millis() - time > debounce;")

    for index, transition in enumerate(state.transitions):
        condition = _compile_branch_condition(transition, ctx)
        if index == 0:
            lines.append(f"if ({condition}) {{")
        else:
            lines.append(f"}} else if ({condition}) {{")
        lines.extend(
            _indent_body(
                [
                    "time = millis();",
                    f"{ctx.symbol_for_state(transition.target_state)}();",
                ],
                2,
            )
        )
    lines.append("} else {")
    lines.extend(_indent_body([self_call], 2))
    lines.append("}")
    return lines


def compile_state(state: State, ctx: CodegenContext) -> list[str]:
    """Return the complete ``void state_<name>() {...}`` function."""
    fn_name = ctx.symbol_for_state(state.name)
    body: list[str] = []
    if state.is_fault:
        ctx.mark_helper(_BLINK_HELPER)
        body.append(f"{_BLINK_HELPER}({state.fault});")
        body.append(f"{fn_name}();")
    else:
        body.extend(compile_action(action, ctx) for action in state.actions)
        body.extend(compile_transitions(state, ctx))
    return [f"void {fn_name}() {{", *_indent_body(body, 2), "}"]
