"""Parser-facing constructors that accumulate one Program.

A front end (a grammar-driven parser or the embedded DSL) creates one
``ProgramBuilder`` per input and calls its ``register_resource`` /
``make_*`` methods while it consumes the source. Each call is tagged with
a source line: the explicit ``line=`` argument when given, otherwise the
builder's ``lineno``, which a parser advances as it reads::

    builder = ProgramBuilder("Switch")
    builder.register_resource(2, ResourceKind.SENSOR, "btn")
    builder.register_resource(13, ResourceKind.ACTUATOR, "led")
    builder.make_state(
        "Off",
        [builder.make_action("led", LOW)],
        [builder.make_transition(builder.make_condition("btn", HIGH), "On")],
        initial=True,
    )
    ...
    result = builder.compile(out=sys.stdout)

Names are not resolved here; forward references to later states are legal.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import IO, TYPE_CHECKING, Any

from statewire.core.expression import (
    AndExpr,
    Condition,
    Expression,
    ExpressionKind,
    OrExpr,
    is_expression,
)
from statewire.core.graph import Action, OnDelay, OnExpression, State, Transition
from statewire.core.program import Program
from statewire.core.resource import Resource, ResourceKind

if TYPE_CHECKING:
    from statewire.core.diagnostics import DiagnosticReport
    from statewire.wiring.codegen.generate import EmitResult


class ProgramBuilder:
    """Accumulates resources and states for a single compilation."""

    def __init__(
        self,
        name: str,
        *,
        fault_pin: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self._program = Program(name=name, fault_pin=fault_pin, source_file=source_file)
        self.lineno: int | None = None

    @property
    def program(self) -> Program:
        return self._program

    def _resolve_line(self, line: int | None) -> int | None:
        resolved = self.lineno if line is None else line
        if resolved is not None:
            end = self._program.end_line
            if end is None or resolved > end:
                self._program.end_line = resolved
        return resolved

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def register_resource(
        self,
        port: int,
        kind: ResourceKind | str,
        name: str,
        *,
        line: int | None = None,
        source_file: str | None = None,
    ) -> Resource:
        resource = Resource(
            name=name,
            kind=kind if isinstance(kind, ResourceKind) else ResourceKind(kind),
            port=port,
            line=self._resolve_line(line),
            source_file=source_file,
        )
        return self._program.registry.register(resource)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def make_expression(self, kind: ExpressionKind | str, *operands: Any) -> Expression:
        kind = kind if isinstance(kind, ExpressionKind) else ExpressionKind(kind)
        if len(operands) != 2:
            raise TypeError(f"{kind.value} expression takes 2 operands, got {len(operands)}")
        if kind is ExpressionKind.CONDITION:
            return Condition(*operands)
        if kind is ExpressionKind.AND:
            return AndExpr(*operands)
        return OrExpr(*operands)

    def make_condition(self, sensor_name: str, level: Any) -> Condition:
        return Condition(sensor_name, level)

    def make_and(self, left: Expression, right: Expression) -> AndExpr:
        return AndExpr(left, right)

    def make_or(self, left: Expression, right: Expression) -> OrExpr:
        return OrExpr(left, right)

    # ------------------------------------------------------------------
    # Actions and transitions
    # ------------------------------------------------------------------

    def make_action(
        self,
        resource_name: str,
        level: Any,
        *,
        line: int | None = None,
        source_file: str | None = None,
    ) -> Action:
        return Action(
            target=resource_name,
            level=level,
            line=self._resolve_line(line),
            source_file=source_file,
        )

    def make_transition(
        self,
        guard: Expression | int,
        target_state_name: str,
        *,
        line: int | None = None,
        source_file: str | None = None,
    ) -> Transition:
        """Expression guard -> ``OnExpression``; int milliseconds -> ``OnDelay``."""
        resolved = self._resolve_line(line)
        if is_expression(guard):
            return OnExpression(guard, target_state_name, line=resolved, source_file=source_file)  # type: ignore[arg-type]
        if isinstance(guard, int) and not isinstance(guard, bool):
            return OnDelay(guard, target_state_name, line=resolved, source_file=source_file)
        raise TypeError(
            f"Transition guard must be an expression or int delay, got {type(guard).__name__}"
        )

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def make_state(
        self,
        name: str,
        actions: Iterable[Action] = (),
        transitions: Iterable[Transition] = (),
        initial: bool = False,
        *,
        line: int | None = None,
        source_file: str | None = None,
    ) -> State:
        """Append a normal state; ``initial=True`` makes it the initial state (last call wins)."""
        state = State(
            name=name,
            actions=tuple(actions),
            transitions=tuple(transitions),
            line=self._resolve_line(line),
            source_file=source_file,
        )
        return self._program.add_state(state, initial=initial)

    def make_fault_state(
        self,
        name: str,
        blink_count: int,
        *,
        line: int | None = None,
        source_file: str | None = None,
    ) -> State:
        state = State(
            name=name,
            fault=blink_count,
            line=self._resolve_line(line),
            source_file=source_file,
        )
        return self._program.add_state(state)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def build(self) -> Program:
        return self._program

    def validate(self) -> DiagnosticReport:
        return self._program.validate()

    def compile(self, out: IO[str] | None = None, **options: Any) -> EmitResult:
        """Validate, then emit only when validation reported no error."""
        from statewire.wiring.codegen.generate import compile_program

        return compile_program(self._program, out=out, **options)


__all__ = ["ProgramBuilder"]
