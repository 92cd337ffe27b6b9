"""Unit tests for the Wiring code generation pieces."""

from __future__ import annotations

import pytest

from statewire.core import (
    HIGH,
    LOW,
    Action,
    Condition,
    OnDelay,
    OnExpression,
    Program,
    ProgramBuilder,
    Registry,
    Resource,
    ResourceKind,
    State,
)
from statewire.wiring.codegen import (
    CodegenContext,
    compile_action,
    compile_expression,
    compile_state,
    compile_transitions,
    generate_wiring,
)
from statewire.wiring.codegen._util import _c_identifier, _mangle_symbol


def _context(*resources: tuple[str, ResourceKind, int], states: list[State] | None = None) -> CodegenContext:
    registry = Registry()
    for name, kind, port in resources:
        registry.register(Resource(name, kind, port))
    program = Program(name="Demo", registry=registry, states=list(states or []))
    ctx = CodegenContext(program=program, debounce_ms=200)
    ctx.assign_symbols()
    return ctx


_SENSORS = (("a", ResourceKind.SENSOR, 2), ("b", ResourceKind.SENSOR, 3))


class TestCompileExpression:
    def test_condition(self):
        ctx = _context(*_SENSORS)
        assert compile_expression(Condition("a", HIGH), ctx) == "digitalRead(a) == HIGH"
        assert compile_expression(Condition("b", LOW), ctx) == "digitalRead(b) == LOW"

    def test_binary_nodes_fully_parenthesized(self):
        ctx = _context(*_SENSORS)
        expr = (Condition("a") & Condition("b", LOW)) | Condition("a", LOW)
        assert compile_expression(expr, ctx) == (
            "((digitalRead(a) == HIGH && digitalRead(b) == LOW) || digitalRead(a) == LOW)"
        )

    def test_right_nested_tree_keeps_shape(self):
        ctx = _context(*_SENSORS)
        expr = Condition("a") | (Condition("b") & Condition("a"))
        assert compile_expression(expr, ctx) == (
            "(digitalRead(a) == HIGH || (digitalRead(b) == HIGH && digitalRead(a) == HIGH))"
        )

    def test_unknown_resource_is_internal_error(self):
        ctx = _context(*_SENSORS)
        with pytest.raises(RuntimeError, match="No symbol assigned for resource 'zz'"):
            compile_expression(Condition("zz"), ctx)


def test_compile_action():
    ctx = _context(("led", ResourceKind.ACTUATOR, 13))
    assert compile_action(Action("led", HIGH), ctx) == "digitalWrite(led, HIGH);"
    assert compile_action(Action("led", LOW), ctx) == "digitalWrite(led, LOW);"


class TestCompileTransitions:
    def test_empty_list_is_unconditional_self_call(self):
        idle = State("idle")
        ctx = _context(states=[idle])
        assert compile_transitions(idle, ctx) == ["state_idle();"]

    def test_expression_branch_is_debounced(self):
        s = State("s", transitions=[OnExpression(Condition("a"), "t")])
        ctx = _context(*_SENSORS, states=[s, State("t")])
        assert compile_transitions(s, ctx) == [
            "boolean guard = millis() - time > debounce;",
            "if (digitalRead(a) == HIGH && guard) {",
            "  time = millis();",
            "  state_t();",
            "} else {",
            "  state_s();",
            "}",
        ]

    def test_delay_branch_is_self_gating(self):
        s = State("s", transitions=[OnDelay(1500, "t")])
        ctx = _context(states=[s, State("t")])
        assert compile_transitions(s, ctx) == [
            "if (millis() - time > 1500) {",
            "  time = millis();",
            "  state_t();",
            "} else {",
            "  state_s();",
            "}",
        ]

    def test_branches_follow_declaration_order(self):
        s = State(
            "s",
            transitions=[
                OnExpression(Condition("a"), "first"),
                OnExpression(Condition("b"), "second"),
                OnDelay(10, "third"),
            ],
        )
        ctx = _context(*_SENSORS, states=[s, State("first"), State("second"), State("third")])
        lines = compile_transitions(s, ctx)
        assert lines[1] == "if (digitalRead(a) == HIGH && guard) {"
        assert lines[4] == "} else if (digitalRead(b) == HIGH && guard) {"
        assert lines[7] == "} else if (millis() - time > 10) {"
        assert lines.index("  state_first();") < lines.index("  state_second();")
        assert lines[-3:] == ["} else {", "  state_s();", "}"]


class TestCompileState:
    def test_normal_state(self):
        s = State("Off", actions=[Action("led", LOW)])
        ctx = _context(("led", ResourceKind.ACTUATOR, 13), states=[s])
        assert compile_state(s, ctx) == [
            "void state_Off() {",
            "  digitalWrite(led, LOW);",
            "  state_Off();",
            "}",
        ]
        assert ctx.helpers_in_order() == []

    def test_fault_state_blinks_then_recurses(self):
        s = State("broken", fault=4)
        ctx = _context(states=[s])
        assert compile_state(s, ctx) == [
            "void state_broken() {",
            "  blinkError(4);",
            "  state_broken();",
            "}",
        ]
        assert ctx.helpers_in_order() == ["blinkError"]


class TestSymbols:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("btn", "btn"),
            ("front-door", "front_door"),
            ("2nd", "_2nd"),
            ("", "_"),
        ],
    )
    def test_c_identifier(self, name, expected):
        assert _c_identifier(name) == expected

    def test_mangle_symbol_dedupes_and_escapes_reserved(self):
        used: set[str] = set()
        assert _mangle_symbol("a-b", "", used) == "a_b"
        assert _mangle_symbol("a.b", "", used) == "a_b_2"
        assert _mangle_symbol("loop", "", used, {"loop"}) == "sw_loop"

    def test_reserved_resource_names_are_prefixed(self):
        ctx = _context(
            ("time", ResourceKind.SENSOR, 2),
            ("int", ResourceKind.SENSOR, 3),
            ("led", ResourceKind.ACTUATOR, 4),
        )
        assert ctx.symbol_for_resource("time") == "sw_time"
        assert ctx.symbol_for_resource("int") == "sw_int"
        assert ctx.symbol_for_resource("led") == "led"

    def test_cpp_keywords_and_alternative_tokens_are_prefixed(self):
        ctx = _context(
            ("throw", ResourceKind.SENSOR, 2),
            ("nullptr", ResourceKind.SENSOR, 3),
            ("and", ResourceKind.ACTUATOR, 13),
            ("xor_eq", ResourceKind.ACTUATOR, 12),
        )
        assert ctx.symbol_for_resource("throw") == "sw_throw"
        assert ctx.symbol_for_resource("nullptr") == "sw_nullptr"
        assert ctx.symbol_for_resource("and") == "sw_and"
        assert ctx.symbol_for_resource("xor_eq") == "sw_xor_eq"

    def test_arduino_core_names_are_prefixed(self):
        ctx = _context(
            ("A0", ResourceKind.SENSOR, 2),
            ("A7", ResourceKind.SENSOR, 3),
            ("LED_BUILTIN", ResourceKind.ACTUATOR, 13),
            ("Serial", ResourceKind.ACTUATOR, 12),
            ("analogWrite", ResourceKind.ACTUATOR, 11),
        )
        assert ctx.symbol_for_resource("A0") == "sw_A0"
        assert ctx.symbol_for_resource("A7") == "sw_A7"
        assert ctx.symbol_for_resource("LED_BUILTIN") == "sw_LED_BUILTIN"
        assert ctx.symbol_for_resource("Serial") == "sw_Serial"
        assert ctx.symbol_for_resource("analogWrite") == "sw_analogWrite"

    def test_reserved_resource_names_never_reach_the_sketch(self):
        builder = ProgramBuilder("Demo")
        builder.register_resource(2, ResourceKind.SENSOR, "throw")
        builder.register_resource(13, ResourceKind.ACTUATOR, "LED_BUILTIN")
        builder.make_state(
            "Idle",
            [builder.make_action("LED_BUILTIN", LOW)],
            [builder.make_transition(builder.make_condition("throw", HIGH), "Idle")],
            initial=True,
        )
        source = generate_wiring(builder.build())
        assert "int sw_throw = 2;" in source
        assert "int sw_LED_BUILTIN = 13;" in source
        assert "int throw" not in source
        assert "int LED_BUILTIN" not in source

    def test_state_functions_never_clash_with_resources(self):
        states = [State("On"), State("On!")]
        ctx = _context(("state_On", ResourceKind.ACTUATOR, 4), states=states)
        assert ctx.symbol_for_resource("state_On") == "state_On"
        assert ctx.symbol_for_state("On") == "state_On_2"
        assert ctx.symbol_for_state("On!") == "state_On_"

    def test_assignment_is_deterministic(self):
        builder = ProgramBuilder("Demo")
        builder.register_resource(2, ResourceKind.SENSOR, "x y")
        builder.register_resource(3, ResourceKind.SENSOR, "x-y")
        first = CodegenContext(program=builder.build(), debounce_ms=200)
        second = CodegenContext(program=builder.build(), debounce_ms=200)
        first.assign_symbols()
        second.assign_symbols()
        assert first.resource_symbols == second.resource_symbols == {"x y": "x_y", "x-y": "x_y_2"}
